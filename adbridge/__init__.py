# adbridge/__init__.py
"""
adbridge - cross-platform campaign distribution engine.

Modules:
- models: unified campaign data + uniform results
- mappings: lookup tables (objectives, interests, locations, languages, CTAs)
- platforms: per-platform targeting transformers and API clients
- distributors: validation + orchestration boundary (never raises)
- integrations / infra: http transport, errors, credentials, settings, logging
"""

__version__ = "1.0.0"
