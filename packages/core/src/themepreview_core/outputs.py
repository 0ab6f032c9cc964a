"""Named output values for downstream workflow steps."""

from __future__ import annotations

import logging
import os
import uuid

logger = logging.getLogger(__name__)


def output_variables(variables: dict[str, str], environ: dict | None = None) -> None:
    """Publish ``variables`` as GitHub Actions step outputs.

    Appends to the file named by GITHUB_OUTPUT. Outside Actions the values
    are only logged so a local run still shows them.
    """
    env = os.environ if environ is None else environ
    output_path = env.get("GITHUB_OUTPUT")
    if not output_path:
        for name, value in variables.items():
            logger.info("%s=%s", name, value)
        return

    with open(output_path, "a", encoding="utf-8") as f:
        for name, value in variables.items():
            value = str(value)
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                f.write(f"{name}={value}\n")
