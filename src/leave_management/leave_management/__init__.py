"""Leave Management package.

Feature modules (directory, quotas, leaves) each follow the same layering:
plain domain models, repository interfaces, MySQL / in-memory repositories,
services holding the business rules and a thin Flask controller.
"""
