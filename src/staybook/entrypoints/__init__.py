"""Entrypoints (inbound adapters) for STAYBOOK.

Expose the application to the outside world: today the ``staybook`` CLI.
Parse and validate inputs, send commands through the message bus built by
``staybook.bootstrap``, and present results.

Dependency rule: may import `staybook.bootstrap` and `staybook.service_layer`;
avoid importing `staybook.adapters` directly (database plumbing commands
under ``staybook db`` are the exception).
"""
