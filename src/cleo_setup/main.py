import typer
from cleo_setup.commands.setup import SetupCommand, setup_cleo
from cleo_setup.logging import setup_logging, get_logger

app = typer.Typer(
    help="[bold blue]CLEO setup[/bold blue] - configure CLEO from a CARL setup string",
    rich_markup_mode="rich",
)

app.command("setup", cls=SetupCommand)(setup_cleo)


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """
    [bold blue]CLEO setup[/bold blue] - configure CLEO from a CARL setup string

    Prints environment variables for the current shell, or persists the
    configuration and CA certificate with --persistent.
    """
    if not ctx.invoked_subcommand:
        typer.echo(ctx.get_help())


def main():
    setup_logging()
    logger = get_logger("cleo_setup.main")
    logger.info("CLEO setup started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {str(e)}")
        raise
    finally:
        logger.info("CLEO setup finished")


if __name__ == "__main__":
    main()
