"""CLI commands for global configuration management."""

import typer

from smartcommit import global_config
from smartcommit.config import AVAILABLE_MODELS, LLMProvider, get_api_key_env_var, load_config

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global smartcommit configuration in ~/.smartcommit/",
    add_completion=False,
)

VALID_PROVIDERS = ", ".join(p.value for p in LLMProvider)


def _parse_provider(provider: str) -> LLMProvider:
    try:
        return LLMProvider(provider.lower())
    except ValueError:
        typer.echo(f"Invalid provider: {provider}", err=True)
        typer.echo(f"Valid providers: {VALID_PROVIDERS}")
        raise typer.Exit(1)


def _mask(api_key: str) -> str:
    return api_key[:8] + "..." + api_key[-4:] if len(api_key) > 12 else "***"


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    try:
        config = load_config()
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    source = "~/.smartcommit/config.yaml" if global_config.is_configured() else "defaults"
    typer.echo(f"Current smartcommit configuration ({source}):")
    typer.echo()
    typer.echo("  Providers (in priority order):")
    for provider in config.provider_order:
        env_var = get_api_key_env_var(provider)
        api_key = config.api_key(provider)
        key_state = _mask(api_key) if api_key else "not set"
        typer.echo(f"    {provider.value}: {config.model_for(provider)} ({env_var}: {key_state})")
    typer.echo()
    typer.echo(f"  Max Tokens: {config.max_tokens}")
    typer.echo(f"  Temperature: {config.temperature}")
    typer.echo(f"  LLM Timeout: {config.llm_timeout}s")
    typer.echo(f"  Git Timeout: {config.git_timeout}s")
    typer.echo(f"  Git Server: {' '.join(config.git_server_command)}")
    typer.echo(f"  Status Parser: {config.status_parser}")


@config_app.command("init")
def config_init() -> None:
    """Write ~/.smartcommit/config.yaml with default values."""
    if global_config.is_configured():
        typer.echo(f"Config already exists at {global_config.get_config_file_path()}")
        return

    try:
        global_config.initialize_default_config()
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Wrote default config to {global_config.get_config_file_path()}")


@config_app.command("set-key")
def config_set_key(
    provider: str = typer.Argument(..., help=f"Provider name ({VALID_PROVIDERS})"),
) -> None:
    """Set or update an API key for a provider."""
    llm_provider = _parse_provider(provider)
    env_var = get_api_key_env_var(llm_provider)

    typer.echo(f"Setting API key for {llm_provider.value}")
    api_key = typer.prompt(f"Enter your {llm_provider.value} API key", hide_input=True)

    try:
        global_config.save_credential(env_var, api_key)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved for {llm_provider.value}")


@config_app.command("set-model")
def config_set_model(
    provider: str = typer.Argument(..., help=f"Provider name ({VALID_PROVIDERS})"),
    model: str = typer.Argument(..., help="Model name"),
) -> None:
    """Set the model used for a provider."""
    llm_provider = _parse_provider(provider)

    if model not in AVAILABLE_MODELS[llm_provider]:
        typer.echo(f"Warning: {model} is not in the list of known models for {llm_provider.value}")

    try:
        global_config.set_provider_model(llm_provider, model)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Model for {llm_provider.value} set to: {model}")


@config_app.command("set-order")
def config_set_order(
    providers: list[str] = typer.Argument(..., help="Providers in the order they should be tried"),
) -> None:
    """Set the order in which providers are tried."""
    order = [_parse_provider(p) for p in providers]
    if len(set(order)) != len(order):
        typer.echo("Each provider may only appear once.", err=True)
        raise typer.Exit(1)

    try:
        global_config.set_provider_order(order)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Provider order: {' -> '.join(p.value for p in order)}")


@config_app.command("list-providers")
def config_list_providers() -> None:
    """List supported LLM providers and their models."""
    for llm_provider in LLMProvider:
        typer.echo(f"{llm_provider.value} ({get_api_key_env_var(llm_provider)}):")
        for model in AVAILABLE_MODELS[llm_provider]:
            typer.echo(f"  • {model}")
        typer.echo()
