"""Manage per-project sharpkit configuration (.sharpkit/config.json)."""

from __future__ import annotations

import click

from sharpkit.config import (
    SETTING_NAMES,
    coerce_setting,
    find_project_root,
    get_config_path,
    load_project_config,
    load_settings,
    write_project_config,
)
from sharpkit.output.formatter import json_envelope, to_json


@click.command("config")
@click.option("--set", "set_pair", nargs=2, default=None, metavar="KEY VALUE", help="Persist a setting.")
@click.option("--unset", "unset_key", default=None, metavar="KEY", help="Remove a persisted setting.")
@click.option("--show", is_flag=True, help="Print the effective configuration.")
@click.option("--root", type=click.Path(file_okay=False), default=".", help="Start directory for the project root lookup.")
@click.pass_context
def config(ctx, set_pair, unset_key, show, root):
    """Manage per-project sharpkit configuration (.sharpkit/config.json).

    \b
      sharpkit config --set tab_size 2
      sharpkit config --set use_this_for_ctor_assignments false
      sharpkit config --set private_member_prefix _
      sharpkit config --unset tab_size

    Environment variables (SHARPKIT_TAB_SIZE, SHARPKIT_USE_THIS,
    SHARPKIT_PRIVATE_MEMBER_PREFIX, SHARPKIT_REFORMAT) override the file.
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    if show and (set_pair or unset_key):
        raise click.UsageError("--show cannot be combined with --set or --unset")
    project_root = find_project_root(root)

    if set_pair:
        key, raw = set_pair
        try:
            value = coerce_setting(key, raw)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--set") from None
        config_path = write_project_config({key: value}, project_root)
        if json_mode:
            click.echo(to_json(json_envelope(
                "config",
                summary={"verdict": "saved", key: value},
                config_path=str(config_path),
            )))
            return
        click.echo(f"Saved {key} = {value!r}")
        click.echo(f"Config written to {config_path}")
        return

    if unset_key:
        if unset_key not in SETTING_NAMES:
            raise click.BadParameter(f"unknown setting: {unset_key}", param_hint="--unset")
        config_path = write_project_config({unset_key: None}, project_root)
        if json_mode:
            click.echo(to_json(json_envelope(
                "config",
                summary={"verdict": "removed", "key": unset_key},
                config_path=str(config_path),
            )))
            return
        click.echo(f"Removed {unset_key} from {config_path}")
        return

    # --show is the default action
    stored = load_project_config(project_root)
    effective = load_settings(str(project_root)).to_dict()
    if json_mode:
        click.echo(to_json(json_envelope(
            "config",
            summary={"verdict": "shown"},
            config_path=str(get_config_path(project_root)),
            stored=stored,
            effective=effective,
        )))
        return
    click.echo(f"Config: {get_config_path(project_root)}")
    for name in SETTING_NAMES:
        marker = "" if name not in stored else "  (from config)"
        click.echo(f"  {name} = {effective[name]!r}{marker}")
