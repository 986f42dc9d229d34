"""Demo commands: run canned order scenarios and show the status mapping.

Output
- JSON documents (orders or Problem Details) go to **stdout**.
- Human-oriented status lines go to **stderr**.

Exit codes
- 0 when the scenario completed, 1 when it ended in a domain failure.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import click

from twotrack import config
from twotrack.bootstrap import bootstrap
from twotrack.entrypoints.problem_details import status_table
from twotrack.logging import log_settings

from .helpers import error, success
from .scenarios import SCENARIOS, Discipline, run_scenario

logger = logging.getLogger(__name__)


def _dump(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


@click.command()
@click.argument("name", type=click.Choice(sorted(SCENARIOS), case_sensitive=False))
@click.option(
    "--discipline",
    "-d",
    type=click.Choice([d.value for d in Discipline], case_sensitive=False),
    default=Discipline.RESULTS.value,
    show_default=True,
    help="Error-handling discipline the services use: raise exceptions or return results.",
)
@click.pass_context
def scenario(ctx: click.Context, name: str, discipline: str) -> None:
    """Run one canned order scenario against freshly seeded demo data.

    \b
    Scenarios:
      checkout       create an order, add 2 laptops, submit it
      cancel         checkout, then cancel with reason "changed mind"
      zero-quantity  try to add an item with quantity 0
      ship-pending   try to ship an order that was never submitted
      workflow       create, fill, submit, pay and ship in one call
    """
    try:
        settings = config.load_settings()
    except config.InvalidConfigurationError as e:
        raise click.ClickException(str(e)) from e
    log_settings(logger, settings)
    if not settings.seed_demo_data:
        logger.warning("%s is off; scenarios need the demo data", config.SEED_DEMO_DATA_ENV)

    container = bootstrap(settings)
    chosen = Discipline(discipline.lower())
    logger.info("Running scenario %s with %s", name, chosen.value)
    outcome = asyncio.run(run_scenario(name.lower(), chosen, container))

    _dump(outcome.payload)
    if outcome.succeeded:
        success(f"Scenario {name} completed ({chosen.value}).")
    else:
        error(
            f"Scenario {name} failed ({chosen.value}): "
            f"{outcome.payload['errorCode']} -> HTTP {outcome.payload['status']}"
        )
        ctx.exit(1)


@click.command("status-map")
def status_map() -> None:
    """Print the error category to HTTP status mapping as JSON."""
    _dump(status_table())
