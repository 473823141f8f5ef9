"""Ogla - B2B storefront backend (identity and authentication service)."""
