# Routes package init
"""
Cash Card API: Routes Package
=============================

Route Inventory:
    - cash_cards.py:  GET /cashcards/{id}   (single card lookup)
    - health.py:      GET /health           (service health check)

Routes handle HTTP concerns only: read the path, call the repository,
choose the status code. Data access lives in services/.
"""
