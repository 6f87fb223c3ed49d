"""User interfaces built on top of the snippetsmith rendering pipeline."""
