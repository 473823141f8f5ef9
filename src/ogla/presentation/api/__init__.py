"""HTTP API for the Ogla identity service."""
