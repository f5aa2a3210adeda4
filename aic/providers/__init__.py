"""Generation backends for aic."""
