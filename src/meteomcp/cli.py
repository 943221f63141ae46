"""meteomcp CLI entrypoint."""

from __future__ import annotations

import click

from meteomcp import __version__


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="meteomcp")
def main() -> None:
    """MeteoChile weather data as stdio tools and a REST API.

    Start a server with ``meteomcp serve``; inspect or try the tool
    catalogue with ``meteomcp tools``.
    """


from meteomcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
