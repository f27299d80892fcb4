"""locale-sync: keep locale JSON files in sync with a reference locale."""
