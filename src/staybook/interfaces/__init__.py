"""Interfaces (application boundary) for STAYBOOK.

Defines the contracts the service layer depends on: repositories and the
unit of work (the persistence gateway), the notification sink and id
generators. Business rules stay out of this package.

Dependency rule: may import `staybook.domain` types; must not import
`staybook.adapters`, `staybook.service_layer` or `staybook.bootstrap`.
"""
