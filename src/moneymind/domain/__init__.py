"""Domain layer for moneymind application.

Services are imported from their modules (``moneymind.domain.transaction``
etc.); this package stays import-light because the database layer depends on
``moneymind.domain.entities``.
"""
