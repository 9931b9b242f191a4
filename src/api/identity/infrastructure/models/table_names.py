"""Custom table names for the identity schema.

The column layout follows the standard identity-framework entities; only
the table names differ from the framework defaults (AspNetUsers, ...).
"""

USERS = "Users"
ROLES = "Roles"
USER_ROLES = "UserRoles"
USER_CLAIMS = "UserClaims"
USER_LOGINS = "UserLogins"
USER_TOKENS = "UserTokens"
ROLE_CLAIMS = "RoleClaims"

ALL_TABLES = (
    USERS,
    ROLES,
    USER_ROLES,
    USER_CLAIMS,
    USER_LOGINS,
    USER_TOKENS,
    ROLE_CLAIMS,
)
