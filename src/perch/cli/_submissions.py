"""``perch submissions`` — print what the registration apps have stored."""

import argparse
import json

from perch.config import AppConfig
from perch.store import SubmissionStore


def print_submissions(args: argparse.Namespace) -> None:
    """Print every stored submission, oldest first."""
    path = args.store or AppConfig.from_env().store_path
    entries = SubmissionStore(path).load()

    if args.json:
        print(json.dumps({"submissions": [s.to_dict() for s in entries]}, indent=2))
        return

    if not entries:
        print(f"No submissions in {path}")
        return

    for s in entries:
        hobbies = ", ".join(s.hobbies) or "-"
        stamp = s.submitted_at.strftime("%Y-%m-%d %H:%M:%S")
        print(f"{stamp}  {s.fullname} <{s.email}>  gender={s.gender} city={s.city} hobbies={hobbies}")
    print(f"{len(entries)} submission(s)")
