from rich.console import Console

# stdout is reserved for the environment block
console = Console(stderr=True)


def success(message: str):
    """Display success message"""
    console.print(f"✔ {message}", style="bold green")


def error(message: str):
    """Display error message"""
    console.print(f"✖ {message}", style="bold red")


def info(message: str):
    """Display info message"""
    console.print(f"{message}", style="cyan")
