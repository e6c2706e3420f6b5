from __future__ import annotations

from pathlib import Path

import typer

from .config import ConfigError, Flags, load_config
from .core import Pipeline, TaskFailed, TaskName, task_inputs
from .logging import configure_logging, get_logger
from .registry import discover_tasks, require


app = typer.Typer(add_completion=False, help="Static asset build pipeline")
log = get_logger("assetflow.cli")

DEFAULT_CONFIG = "configs/base.yaml"

TASK_HELP = {
    TaskName.CSS: "Compile, prefix, bundle and minify stylesheets.",
    TaskName.SCRIPTS: "Concatenate and transpile scripts (with source map).",
    TaskName.COMPRESS: "Minify the script bundle into scripts.min.js.",
    TaskName.VIEWS: "Minify markup, keeping build:* markers.",
    TaskName.IMAGES: "Copy and optimize images.",
    TaskName.HTML_REPLACE: "Point build:css/build:js blocks at the built bundles.",
    TaskName.WATCH: "Rebuild on source changes.",
    TaskName.SERVER: "Serve the output directory with live reload.",
    TaskName.PRODUCTION: "views, scripts, compress, css, htmlreplace, in order.",
    TaskName.CLEAN: "Delete the output and dependency directories.",
}

# Tasks that honour --xcss / --xjs.
INLINE_TASKS = {TaskName.HTML_REPLACE, TaskName.PRODUCTION}


def run_named(name: TaskName, config: str, flags: Flags) -> None:
    """Run a single task by name; failures exit with code 1."""
    specs = discover_tasks()
    try:
        require(specs)
        build = load_config(config)
    except (KeyError, ConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    if build.log_file:
        configure_logging(log_file=Path(build.log_file))

    pipe = Pipeline(tasks={name: specs[name]}, edges=[], name=f"task.{name.value}")
    try:
        pipe.run(config=build, flags=flags, only_step=name)
    except TaskFailed as e:
        typer.echo(f"Task failed: {e}", err=True)
        raise typer.Exit(code=1)


def _task_command(name: TaskName):
    def command(
        config: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
    ):
        run_named(name, config, Flags())

    command.__doc__ = TASK_HELP[name]
    return command


def _inline_command(name: TaskName):
    def command(
        config: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
        xcss: bool = typer.Option(
            False, "--xcss", help="Inline the built CSS instead of linking it"
        ),
        xjs: bool = typer.Option(
            False, "--xjs", help="Inline the built JS instead of referencing it"
        ),
    ):
        run_named(name, config, Flags(inline_css=xcss, inline_js=xjs))

    command.__doc__ = TASK_HELP[name]
    return command


for _name in TaskName:
    _factory = _inline_command if _name in INLINE_TASKS else _task_command
    app.command(_name.value)(_factory(_name))


@app.command("list")
def list_tasks(
    config: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
):
    """List discovered tasks with the source patterns each one reads."""
    specs = discover_tasks()
    if not specs:
        typer.echo("No tasks discovered.")
        raise typer.Exit(code=0)
    try:
        build = load_config(config)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo("Discovered tasks:")
    for name in sorted(specs.keys(), key=lambda n: n.value):
        inputs = task_inputs(specs[name], build)
        typer.echo(f"- {name.value}" + (f": {', '.join(inputs)}" if inputs else ""))


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
