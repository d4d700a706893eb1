"""
modelreg: a self-healing registry for entity models.

Entity models are stored one document per entity type in a single
Elasticsearch index that the registry creates on demand and recreates if it
disappears.

- :mod:`modelreg.core`: schema, validator, errors, settings, logging
- :mod:`modelreg.store`: document store clients
- :mod:`modelreg.ops`: lifecycle manager and registry operations
- :mod:`modelreg.api`: FastAPI application
- :mod:`modelreg.cli`: Typer command line
"""

__version__ = "0.1.0"
