"""Partner-side loader script and the guidance it prints.

The script is written into the bundle as plain text and only ever executed by
the partner. The guidance strings are shared with the Python loader
(`partner_service`) so both print the same runbook.
"""
import shlex
from string import Template

from partner_bundle.core.config import Settings


def load_message(archive: str) -> str:
    return f"Docker loading {archive}"


def load_missing_message(archive: str) -> str:
    return f"{load_message(archive)} - failed (missing file - {archive})"


def env_info_message(env_file: str) -> str:
    return (
        f'Edit "{env_file}" if you want to start the node with preconfigured ai agents. '
        "You have the possibility to add ai agents also from Zoo Visor."
    )


def compose_info_message(env_file: str, compose_cmd: str) -> str:
    return (
        f'Once done with "{env_file}" changes, to start on-prem infrastructure run: '
        f"{compose_cmd} up -d"
    )


def visor_info_message() -> str:
    return (
        "Once everything is up and running, install/start Zoo Visor "
        "and use the default provided settings on the ui."
    )


class _ScriptTemplate(Template):
    # `$` belongs to the shell
    delimiter = "@"


_LOADER_SCRIPT = _ScriptTemplate("""\
#!/bin/sh
set -e
set -o noglob

ZOO_NODE_ARCHIVE=@archive
DOCKER_LOAD_CMD=@load_cmd
DOCKER_COMPOSE_CMD=@compose_cmd
DOCKER_COMPOSE_ENV_FILE=@env_file


# --- helper functions for logs ---
# one space after the tag, same lines as the Python loader prints
info() {
  echo "[INFO] $*"
}
warn() {
  echo "[WARN] $*" >&2
}
fatal() {
  echo "[ERRO] $*" >&2
  exit 1
}

# --- load image ---
load_docker_image() {
  msg="Docker loading ${ZOO_NODE_ARCHIVE}"
  if [ -f "${ZOO_NODE_ARCHIVE}" ]; then
    info "${msg}"
    ${DOCKER_LOAD_CMD} "${ZOO_NODE_ARCHIVE}"
  else
    fatal "${msg} - failed (missing file - ${ZOO_NODE_ARCHIVE})"
  fi
}

# --- info about initial agents configuration ---
post_prepare_env_info() {
  info "Edit \\"${DOCKER_COMPOSE_ENV_FILE}\\" if you want to start the node with preconfigured ai agents. You have the possibility to add ai agents also from Zoo Visor."
}

# --- info docker compose ---
post_prepare_compose_info() {
  info "Once done with \\"${DOCKER_COMPOSE_ENV_FILE}\\" changes, to start on-prem infrastructure run: ${DOCKER_COMPOSE_CMD} up -d"
}

# --- info visor ---
post_prepare_visor_info() {
  info "Once everything is up and running, install/start Zoo Visor and use the default provided settings on the ui."
}

load_docker_image
post_prepare_env_info
post_prepare_compose_info
post_prepare_visor_info
""")


def render_loader_script(settings: Settings) -> str:
    """Return the partner's `prepare.sh` for this configuration. No side effects."""
    return _LOADER_SCRIPT.substitute(
        archive=shlex.quote(settings.ZOO_NODE_ARCHIVE),
        load_cmd=shlex.quote(settings.DOCKER_LOAD_CMD),
        compose_cmd=shlex.quote(settings.DOCKER_COMPOSE_CMD),
        env_file=shlex.quote(settings.DOCKER_COMPOSE_ENV_FILE),
    )
