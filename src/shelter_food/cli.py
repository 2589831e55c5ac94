import json
from typing import Optional

import typer

from .errors import OrderValidationError
from .log import configure_logging
from .order import explain_order
from .settings import env_overrides, parse_number

app = typer.Typer(help="Shelter dog-food ordering utilities")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Log level (default: SHELTER_FOOD_LOG_LEVEL or WARNING)"),
) -> None:
    try:
        configure_logging(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level")


@app.command()
def order(
    small: int = typer.Argument(..., help="# small dogs in the shelter"),
    medium: int = typer.Argument(..., help="# medium dogs in the shelter"),
    large: int = typer.Argument(..., help="# large dogs in the shelter"),
    leftover_lbs: float = typer.Argument(..., help="Pounds of food left over"),
    consumption_small: Optional[str] = typer.Option(None, help="Lbs a small dog eats per month (min 5)"),
    consumption_medium: Optional[str] = typer.Option(None, help="Lbs a medium dog eats per month (min 10)"),
    consumption_large: Optional[str] = typer.Option(None, help="Lbs a large dog eats per month (min 15)"),
    max_dogs: Optional[str] = typer.Option(None, help="Max # dogs the shelter can hold"),
    over_order_percent: Optional[str] = typer.Option(None, help="% added on top of current needs"),
    explain: bool = typer.Option(False, "--explain", help="Print the whole calculation"),
) -> None:
    """Compute next month's food order in pounds."""
    given = {
        "consumption_small": consumption_small,
        "consumption_medium": consumption_medium,
        "consumption_large": consumption_large,
        "max_dogs": max_dogs,
        "over_order_percent": over_order_percent,
    }
    overrides = env_overrides()
    overrides.update({key: parse_number(value) for key, value in given.items() if value is not None})

    try:
        breakdown = explain_order(small, medium, large, leftover_lbs, overrides)
    except OrderValidationError as exc:
        typer.echo(json.dumps(exc.to_dict(), ensure_ascii=False), err=True)
        raise typer.Exit(code=2)

    payload = breakdown.as_dict() if explain else {"order_lbs": breakdown.order_lbs}
    typer.echo(json.dumps(payload, ensure_ascii=False))


if __name__ == "__main__":
    app()
