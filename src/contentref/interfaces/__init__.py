"""Interfaces (application boundary) for contentref.

Defines framework-free application contracts: ABCs and small DTOs shared by
the service layer and adapters (entity store, locale provider, unit of work).
Business rules stay out of this package.

Dependency rule: this package may only import `contentref.domain` value
objects and errors. It may be imported by `contentref.service_layer`,
`contentref.adapters`, and `contentref.bootstrap`.
"""
