"""Pydantic schemas package.

Folder intent:
  common.py     — APIModel base + HealthResponse
  selection.py  — validate / price / can-add / can-remove request and response bodies
  catalog.py    — service listing and reload responses
  package.py    — saved-package CRUD request DTOs and response models

Wire format is snake_case; currency leaves the engine as integer cents and is
converted to two-decimal numbers only here.
"""
