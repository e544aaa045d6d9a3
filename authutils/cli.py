"""
auth-utilities CLI.

Usage:
    authutils --help                        Show all commands
    authutils validate user@example.com     Validate an address
    authutils validate "x@y" --json         Print the full result as JSON
    authutils normalize " User@Example.COM "
    authutils domain user@example.com
    authutils pkce                          Generate a PKCE verifier/challenge
    authutils authorize-url                 Build the OAuth authorization URL
"""

import typer

app = typer.Typer(
    name="authutils",
    help="auth-utilities CLI - email validation and OAuth helpers",
    no_args_is_help=True,
)


def _print_success(message: str) -> None:
    """Print a success message."""
    typer.echo(f"  ✅ {message}")


def _print_warning(message: str) -> None:
    """Print a warning message."""
    typer.echo(f"  ⚠️ {message}")


def _print_error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"❌ {message}", err=True)


@app.command()
def validate(
    email: str = typer.Argument(..., help="Email address to validate"),
    international: bool | None = typer.Option(
        None,
        "--international/--strict",
        help="Loose international pattern or strict ASCII pattern (default from config.yml)",
    ),
    allow_display_name: bool = typer.Option(
        False, "--allow-display-name", help="Accept 'Name <addr>' syntax"
    ),
    no_require_tld: bool = typer.Option(
        False, "--no-require-tld", help="Accept domains without a dot"
    ),
    max_length: int | None = typer.Option(
        None, "--max-length", "-m", min=0, help="Maximum address length"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Validate an email address. Exits with code 1 when invalid."""
    from authutils.config import get_config
    from authutils.core.logging import setup_logging
    from authutils.services.email_validation import validate as validate_email

    setup_logging()

    defaults = get_config().email_validation
    options = defaults.to_options().model_copy(
        update={
            "allow_international": (
                defaults.allow_international if international is None else international
            ),
            "allow_display_name": allow_display_name or defaults.allow_display_name,
            "require_tld": defaults.require_tld and not no_require_tld,
            "max_length": defaults.max_length if max_length is None else max_length,
        }
    )

    result = validate_email(email, options)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        for error in result.errors:
            _print_error(error)
        for warning in result.warnings:
            _print_warning(warning)
        if result.is_valid:
            _print_success(f"{email.strip()} is valid")

    if not result.is_valid:
        raise typer.Exit(1)


@app.command()
def normalize(email: str = typer.Argument(..., help="Email address to normalize")):
    """Print the trimmed, lowercased form of an address."""
    from authutils.services.email_validation import normalize as normalize_email

    typer.echo(normalize_email(email))


@app.command()
def domain(email: str = typer.Argument(..., help="Email address")):
    """Print the domain of an address. Exits with code 1 if there is none."""
    from authutils.services.email_validation import extract_domain

    extracted = extract_domain(email)
    if extracted is None:
        _print_error(f"No domain found in: {email}")
        raise typer.Exit(1)
    typer.echo(extracted)


@app.command()
def pkce(
    method: str = typer.Option("S256", "--method", help="Code challenge method: S256 or plain"),
):
    """Generate a PKCE code verifier and challenge."""
    from authutils.core.security import generate_pkce_challenge

    if method not in ("S256", "plain"):
        _print_error(f"Unknown code challenge method: {method}")
        typer.echo("   Valid options: S256, plain")
        raise typer.Exit(1)

    challenge = generate_pkce_challenge(method)  # type: ignore[arg-type]
    typer.echo(challenge.model_dump_json(indent=2))


@app.command("authorize-url")
def authorize_url(
    state: str | None = typer.Option(None, "--state", help="Fixed state value"),
):
    """Print the authorization URL for the configured OAuth client."""
    from authutils.config import get_config
    from authutils.core.security import build_authorization_request, generate_pkce_challenge

    oauth = get_config().oauth
    if not oauth.is_configured():
        _print_error("OAuth client not configured. Set oauth in config.yml or OAUTH_* env vars.")
        raise typer.Exit(1)

    challenge = generate_pkce_challenge()
    request = build_authorization_request(oauth, state=state, pkce=challenge)

    typer.echo(request.build_url(oauth.authorization_endpoint))
    typer.echo(f"code_verifier: {challenge.code_verifier}", err=True)


if __name__ == "__main__":
    app()
