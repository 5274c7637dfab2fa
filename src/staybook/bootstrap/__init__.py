"""Bootstrap (composition root) for STAYBOOK.

Assembles the application at runtime: wires concrete adapters to
service-layer handlers, builds the single event dispatcher and subscribes
the notification listener, composes the message bus and reads configuration.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `staybook.adapters`, `staybook.service_layer`,
  `staybook.interfaces`, `staybook.domain`, and `staybook.config`.
- Inner layers must not import `staybook.bootstrap`.

Public surface:
- Re-export composition factories from this module; keep wiring helpers internal.
- No business rules live here; this is assembly and lifecycle only.
"""

from .bootstrap import (
    AppContainer,
    bootstrap,
    bootstrap_in_memory,
    build_dispatcher,
    build_message_bus,
    inject_dependencies,
)

__all__ = [
    "AppContainer",
    "bootstrap",
    "bootstrap_in_memory",
    "build_dispatcher",
    "build_message_bus",
    "inject_dependencies",
]
