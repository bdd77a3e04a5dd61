"""Entrypoints (inbound adapters) for strview.

Expose the library to the outside world through the ``strview`` command-line
interface. Parse and validate inputs, build views, and present results.
"""
