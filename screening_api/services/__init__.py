"""Services package — all business logic lives here, never in routers.

Files:
  catalog.py            — Service records, immutable ServiceCatalog, CatalogStore (atomic reload)
  rules.py              — volume tier / bundle discount configuration
  selection.py          — selection shape checks and de-duplication
  validation.py         — dependency / conflict validation, can-add, cascade removal
  pricing.py            — itemization and discounted totals (integer cents)
  money.py              — cent conversion and rounding helpers
  package_selection.py  — PackageSelectionAPI, the seam HTTP handlers call
  package.py            — saved-package workflow (validate, then persist)

Rule: routers call services, services call repositories, repositories do I/O.
      No FastAPI imports in services; the rule modules do no I/O at all.
"""
