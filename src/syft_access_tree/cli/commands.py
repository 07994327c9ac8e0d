import json
import logging
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError

from syft_access_tree.config import AccessTreeConfig
from syft_access_tree.display import render_access_tree
from syft_access_tree.engine.evaluator import PolicyEvaluator
from syft_access_tree.engine.grouping import ROOT_LEVEL
from syft_access_tree.engine.service import AccessTreeService
from syft_access_tree.engine.subjects import SUBJECT_ACTIONS, PermissionSubject
from syft_access_tree.spec.folder import FolderSnapshot

SUBJECT_CHOICES = [subject.value for subject in PermissionSubject]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load_snapshot(path: Path) -> FolderSnapshot:
    try:
        return FolderSnapshot.load(path)
    except (ValidationError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid folder file {path}:\n{e}")


def _load_evaluator(path: Path) -> PolicyEvaluator:
    try:
        return PolicyEvaluator.load(path)
    except (ValidationError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid policy file {path}:\n{e}")


def _load_config(path: Optional[Path]) -> AccessTreeConfig:
    try:
        return AccessTreeConfig.load(path)
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid config: {e}")


@click.group()
def main():
    """Inspect effective access over secret folders."""
    pass


@main.command()
@click.option(
    "--folders",
    "folders_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON folder snapshot.",
)
@click.option(
    "--policy",
    "policy_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON permission policy.",
)
@click.option("--env", "environment", default=None, help="Environment slug.")
@click.option("--subject", type=click.Choice(SUBJECT_CHOICES), default=None)
@click.option("--path", "focus_path", default="/", show_default=True)
@click.option("--secret-name", default=None, help="Scope checks to one secret.")
@click.option(
    "--expand",
    multiple=True,
    metavar="PARENT_ID",
    help="Show one more page under this folder. Repeatable.",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option("--json", "as_json", is_flag=True, help="Print the graph as JSON.")
@click.option("--verbose", "-v", is_flag=True)
def show(
    folders_path: Path,
    policy_path: Path,
    environment: Optional[str],
    subject: Optional[str],
    focus_path: str,
    secret_name: Optional[str],
    expand: tuple[str, ...],
    config_path: Optional[Path],
    as_json: bool,
    verbose: bool,
):
    """Show the access tree for one environment and subject."""
    _setup_logging(verbose)

    config = _load_config(config_path)
    snapshot = _load_snapshot(folders_path)
    evaluator = _load_evaluator(policy_path)

    environment = environment or config.default_environment
    if environment is None:
        if not snapshot.environments:
            raise click.ClickException(f"No environments in {folders_path}")
        environment = next(iter(snapshot.environments))
    if snapshot.get(environment) is None:
        available = ", ".join(snapshot.environments) or "none"
        raise click.BadParameter(
            f"Unknown environment '{environment}' (available: {available})",
            param_hint="--env",
        )

    service = AccessTreeService(config=config)
    service.update(
        snapshot=snapshot,
        evaluator=evaluator,
        environment=environment,
        subject=subject or config.default_subject,
        focus_path=focus_path,
        secret_name=secret_name,
    )
    for parent_id in expand:
        service.show_more(parent_id)

    if as_json:
        click.echo(json.dumps(service.graph.model_dump(mode="json"), indent=2))
        return

    click.echo(render_access_tree(service.graph), nl=False)
    for parent_id in service.levels_with_more():
        counts = service.counts_for(parent_id)
        if parent_id is ROOT_LEVEL:
            click.echo(
                f"top level: showing {counts.visible_count} of {counts.total_count}"
            )
            continue
        click.echo(
            f"{parent_id}: showing {counts.visible_count} of {counts.total_count} "
            f"(--expand {parent_id})"
        )
    click.echo(f"{service.total_folder_count} relevant folders")


@main.command()
def subjects():
    """List permission subjects and their actions."""
    for subject, actions in SUBJECT_ACTIONS.items():
        click.echo(f"{subject.value}: {', '.join(actions)}")


if __name__ == "__main__":
    main()
