"""Interactive credential setup."""
from pathlib import Path
from typing import Optional

import click
from colorama import Fore, Style

from config import Credentials, save_credentials

# (prompt, attribute, hidden)
CREDENTIAL_PROMPTS = [
    ("Consumer Key", "consumer_key", False),
    ("Consumer Secret", "consumer_secret", True),
    ("Token", "token", False),
    ("Token Secret", "token_secret", True),
    ("Realm (Account ID)", "realm", False),
]


def print_header(title: str):
    """Print a section header."""
    click.echo(f"\n{Fore.CYAN}{'━' * 45}", err=True)
    click.echo(f"{Fore.CYAN}{title}", err=True)
    click.echo(f"{Fore.CYAN}{'━' * 45}{Style.RESET_ALL}\n", err=True)


def prompt_credentials(existing: Optional[Credentials] = None) -> Credentials:
    """
    Ask for each credential field.

    Args:
        existing: Current credentials; non-secret values are offered as defaults

    Returns:
        Credentials: Values entered, whitespace trimmed
    """
    values = {}
    for label, attr, hidden in CREDENTIAL_PROMPTS:
        default = None
        if existing is not None and not hidden:
            default = getattr(existing, attr) or None
        answer = click.prompt(label, hide_input=hidden, default=default, err=True)
        values[attr] = answer.strip()
    return Credentials(**values)


def run_init(config_path: Path, existing: Optional[Credentials] = None) -> Path:
    """Prompt for credentials and save them."""
    print_header("NetSuite Credential Setup")
    credentials = prompt_credentials(existing)

    missing = credentials.missing_fields()
    if missing:
        click.echo(f"{Fore.YELLOW}Warning: empty values for {', '.join(missing)}", err=True)

    path = save_credentials(credentials, config_path)
    click.echo(f"{Fore.GREEN}Credentials saved to {path}", err=True)
    return path
