"""
Notas Fiscais: a Reflex dashboard for pending and processed service invoices.

The pending view lists notas awaiting processing, with status counters,
filters and a reprocess action; the history view lists processed notas with
PDF and XML downloads. The settings page administers team members through
a hosted GoTrue-compatible auth service.

Subpackages:
- components: Reflex UI components
- controllers: Per-session view logic (queries, debounced search, admin checks)
- models: Domain records, query/page values and Reflex row models
- services: Invoice webhooks, member directory and auth (live and demo)
- utils: Formatting and the filter/sort/paginate pipeline
- data: Demo fixtures

Main entry points:
- app.main(): Start the development server
- app.app: The Reflex application instance
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
