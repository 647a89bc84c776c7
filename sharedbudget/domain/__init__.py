"""
Domain layer package.

Contains pure business logic: entities, value objects, errors,
sanitization and port interfaces. This layer has ZERO external
dependencies. No framework imports, no IO, no side effects.
"""
