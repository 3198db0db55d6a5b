"""Registration form backed by a JSON submission store.

``strict=True`` swaps in the strict password rules; ``client_validation``
additionally ships the rule table to the browser.
"""

import logging

from perch.app import App
from perch.apps import bundled_config
from perch.config import AppConfig
from perch.forms import FormState
from perch.http.request import Request
from perch.models import Submission
from perch.store import SubmissionStore
from perch.templating.returns import Template
from perch.validation import RuleSet, validate
from perch.validation.rulesets import (
    CITIES,
    GENDERS,
    HOBBIES,
    PASSWORD_HINTS,
    REGISTRATION_RULES,
    STRICT_REGISTRATION_RULES,
    Choice,
)

logger = logging.getLogger("perch.apps")

TITLE = "Registration Form"
FIELDS = ("fullname", "email", "password", "confirmPassword", "gender", "hobbies", "city", "terms")


def choice_label(value: str, choices: tuple[Choice, ...]) -> str:
    """Display label for a stored choice value; unknown values pass through."""
    for choice in choices:
        if choice.value == value:
            return choice.label
    return value


def create_app(
    config: AppConfig | None = None,
    *,
    store: SubmissionStore | None = None,
    strict: bool = False,
    client_validation: bool = False,
) -> App:
    app = App(bundled_config(config))
    store = store if store is not None else SubmissionStore(app.config.store_path)
    rules: RuleSet = STRICT_REGISTRATION_RULES if strict else REGISTRATION_RULES

    app.provide(SubmissionStore, lambda: store)
    app.template_filter("choice_label")(choice_label)

    @app.on_startup
    def load_submissions() -> None:
        loaded = store.load()
        logger.info("Loaded %d submission(s) from %s", len(loaded), store.path)

    def form_page(state: FormState) -> Template:
        return state.template(
            "registration/form.html",
            rules=rules,
            client_validation=client_validation,
            password_hints=PASSWORD_HINTS if strict else (),
            genders=GENDERS,
            cities=CITIES,
            hobbies=HOBBIES,
        )

    @app.route("/")
    def index() -> Template:
        return form_page(FormState.empty(TITLE, FIELDS))

    @app.route("/submit", methods=["POST"])
    async def submit(request: Request, store: SubmissionStore) -> Template | tuple[Template, int]:
        form = await request.form()
        result = validate(form, rules)
        if not result:
            state = FormState.from_submission(TITLE, form, result.errors, fields=FIELDS)
            return form_page(state), 400

        submission = Submission.from_form(form)
        store.append(submission)
        return Template(
            "registration/success.html",
            title="Submission Successful",
            submission=submission,
            genders=GENDERS,
            cities=CITIES,
        )

    @app.route("/submissions")
    def submissions(store: SubmissionStore) -> Template:
        entries = store.list()
        return Template(
            "registration/submissions.html",
            title="All Submissions",
            submissions=entries,
            count=len(entries),
            genders=GENDERS,
            cities=CITIES,
        )

    return app
