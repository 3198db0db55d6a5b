"""Contact form: validate, then echo the message back. Nothing is stored."""

from perch.app import App
from perch.apps import bundled_config
from perch.config import AppConfig
from perch.forms import FormState
from perch.http.request import Request
from perch.models import ContactMessage
from perch.templating.returns import Template
from perch.validation import validate
from perch.validation.rulesets import CONTACT_RULES

TITLE = "Contact Form"
FIELDS = tuple(CONTACT_RULES)


def create_app(config: AppConfig | None = None) -> App:
    app = App(bundled_config(config))

    @app.route("/")
    def index() -> Template:
        return FormState.empty(TITLE, FIELDS).template("contact/index.html")

    @app.route("/submit", methods=["POST"])
    async def submit(request: Request) -> Template | tuple[Template, int]:
        form = await request.form()
        result = validate(form, CONTACT_RULES)
        if not result:
            state = FormState.from_submission(TITLE, form, result.errors, fields=FIELDS)
            return state.template("contact/index.html"), 400

        return Template(
            "contact/result.html",
            title="Submission Received",
            message=ContactMessage.from_form(form),
        )

    return app
