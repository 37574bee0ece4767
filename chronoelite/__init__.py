"""ChronoElite watch catalog API."""
