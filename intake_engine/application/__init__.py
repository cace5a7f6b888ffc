"""Application layer - static catalogs and services."""
