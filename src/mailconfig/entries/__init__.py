"""Mail entries: logins, accounts, aliases, lists, bouncers and blackholes."""
