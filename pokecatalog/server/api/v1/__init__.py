"""Version 1 of the HTTP API: catalog, accounts and health."""
