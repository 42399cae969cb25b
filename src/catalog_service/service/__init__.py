"""Resolution engine and catalog service layer."""
