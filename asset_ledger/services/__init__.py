"""
Services Layer
Presentation services used by the routes to read and write backend records.

Services should:
- Receive the configured ApiClient explicitly instead of reaching for a global
- Leave persistence and business rules to the backend
- Handle presentation concerns (coercing form input, derived totals, filtering for display)
- Be stateless apart from the injected client
"""
