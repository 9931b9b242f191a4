"""Identity bounded context: user accounts and their persistence."""
