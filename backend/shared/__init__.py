"""
Shared module for code common to the REST API, the CLI and background jobs.

STRUCTURE:
- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging
  - constants.py: Status enums and transition tables, exam categories, limits

- shared.infrastructure: Database and messaging
  - db.py: SQLAlchemy engine/sessions, safe_commit()
  - correlation.py: Request ids for logs
  - events/: Redis pub/sub for robot-call events

- shared.security: Bcrypt password hashing

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - json_columns.py: JSON list/object columns
  - identifiers.py: PREFIX-N id formatting
  - validators.py: Input validation
  - health.py: Dependency health checks with timeouts

IMPORT EXAMPLES:
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import PaymentStatus, ServingStatus
    from shared.utils.exceptions import NotFoundError, ValidationError
"""
