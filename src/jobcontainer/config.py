"""
Agent settings read from the process environment and an optional .env file.
"""
import os
from typing import Dict, Optional
from dotenv import dotenv_values
from pydantic import BaseModel

from .exceptions import ContainerConfigurationError
from .UTILS.path_translator import TargetPlatform


class AgentSettings(BaseModel):
    """
    Locations of the agent's well-known directories on the host.
    Work and tools folders default to sub-folders of the root.
    """
    root_directory: Optional[str] = None
    work_folder: Optional[str] = None
    tools_directory: Optional[str] = None
    platform: Optional[TargetPlatform] = None

    @property
    def resolved_work_folder(self) -> Optional[str]:
        if self.work_folder:
            return self.work_folder
        if self.root_directory:
            return os.path.join(self.root_directory, "_work")
        return None

    @property
    def resolved_tools_directory(self) -> Optional[str]:
        if self.tools_directory:
            return self.tools_directory
        work = self.resolved_work_folder
        return os.path.join(work, "_tool") if work else None


def load_agent_settings(env_file: Optional[str] = None,
                        environ: Optional[Dict[str, str]] = None) -> AgentSettings:
    """
    Loads agent settings. Values in the process environment override the
    ones from ``env_file``.

    :param env_file: Optional path to a .env file.
    :param environ: Environment to read instead of ``os.environ``.
    :return: The settings.
    """
    merged: Dict[str, Optional[str]] = {}
    if env_file and os.path.exists(env_file):
        merged.update(dotenv_values(env_file))
    merged.update(os.environ if environ is None else environ)

    platform = merged.get("AGENT_PLATFORM")
    try:
        target_platform = TargetPlatform(platform.lower()) if platform else None
    except ValueError:
        supported = ", ".join(p.value for p in TargetPlatform)
        raise ContainerConfigurationError(
            f"Unsupported AGENT_PLATFORM '{platform}'; expected one of: {supported}"
        ) from None

    return AgentSettings(
        root_directory=merged.get("AGENT_ROOTDIRECTORY") or None,
        work_folder=merged.get("AGENT_WORKFOLDER") or None,
        tools_directory=merged.get("AGENT_TOOLSDIRECTORY") or None,
        platform=target_platform,
    )
