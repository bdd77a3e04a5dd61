"""The ``strview`` command-line interface."""
