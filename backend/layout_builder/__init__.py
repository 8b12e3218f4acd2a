"""Layout Builder backend: layout storage API and workspace state."""
