"""
Shared module for code used by the REST API and the operator CLI.

STRUCTURE:
- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging

- shared.infrastructure: Database engines/sessions, request correlation IDs

- shared.security: Session cookies, identity, route admission
  - session_cookie.py: cookie presence and decoding
  - auth.py: access token verification, resolve_identity
  - admission.py: AdmissionPolicy (public paths, login redirects)

- shared.utils: Exceptions, costing helpers

IMPORT EXAMPLES:
    from shared.config.settings import settings
    from shared.security.admission import AdmissionPolicy
    from shared.utils.exceptions import NotFoundError
"""
