"""Reference domains shipped with Basanos."""
