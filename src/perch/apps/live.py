"""Registration with strict passwords and client-side validation.

Adds JSON endpoints next to the HTML pages::

    GET /api/submissions  {"submissions": [...]}
    GET /api/rules        the rule table evaluated by validation.js
"""

from typing import Any

from perch.app import App
from perch.apps import STATIC_DIR, bundled_config, registration
from perch.config import AppConfig
from perch.store import SubmissionStore
from perch.validation import client_rules
from perch.validation.rulesets import STRICT_REGISTRATION_RULES


def create_app(config: AppConfig | None = None, *, store: SubmissionStore | None = None) -> App:
    app = registration.create_app(
        bundled_config(config, static_dir=STATIC_DIR),
        store=store,
        strict=True,
        client_validation=True,
    )

    @app.route("/api/submissions")
    def api_submissions(store: SubmissionStore) -> dict[str, Any]:
        return {"submissions": [s.to_dict() for s in store.list()]}

    @app.route("/api/rules")
    def api_rules() -> dict[str, Any]:
        return client_rules(STRICT_REGISTRATION_RULES)

    return app
