"""v1 router package — all /api/v1/* endpoints live here.

Files:
  deps.py      — request-scoped access to the catalog store and selection API
  services.py  — catalog listing, reload, can-add / can-remove
  packages.py  — validate / price and saved-package CRUD

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to screening_api/services/.
"""
