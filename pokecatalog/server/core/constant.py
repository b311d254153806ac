"""
Server-wide constants.
"""

PROJECT_NAME = "PokeCatalog"

API_PREFIX = "/api"

VERSION = "1.0.0"
