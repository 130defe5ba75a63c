"""MSBuild-evaluated parsers for ``*.vcxproj`` and ``*.csproj`` files.

MSBuild does the property evaluation. A temporary copy of the project gets
an extra ``SWETC-PARSE`` target that prints the interesting properties
between ``<SWETC>`` markers; the block is then cut out of msbuild's output.
"""

from __future__ import annotations

import abc
import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from swetc.errors import ProjectParseError
from swetc.models import MatchRule, ProjectFormat, RawTarget
from swetc.parsers.base import BaseProjectParser
from swetc.tools import run_tool

logger = logging.getLogger(__name__)

HOOK_TARGET = "SWETC-PARSE"
TEMP_SUFFIX = "-swetc-tmp"

_BLOCK_START = "<SWETC>"
_BLOCK_END = "</SWETC>"

_VCXPROJ_HOOK = """
<ItemGroup>
    <Link Include='Whatever' />
</ItemGroup>
<Target Name='SWETC-PARSE'>
    <Message Text='&lt;SWETC&gt;' Importance='High' />
    <Message Text='&lt;TargetName&gt;$(TargetName)&lt;/TargetName&gt;' Importance='High' />
    <Message Text='&lt;TargetType&gt;$(OutputType)&lt;/TargetType&gt;' Importance='High' />
    <Message Text='&lt;ConfigurationType&gt;$(ConfigurationType)&lt;/ConfigurationType&gt;' Importance='High' />
    <Message Text='&lt;Dependencies&gt;%(Link.AdditionalDependencies)&lt;/Dependencies&gt;' Importance='High' />
    <Message Text='&lt;/SWETC&gt;' Importance='High' />
</Target>
"""

_CSPROJ_HOOK = """
<Target Name='SWETC-PARSE'>
    <Message Text='&lt;SWETC&gt;' Importance='High' />
    <Message Text='&lt;TargetName&gt;$(TargetName)&lt;/TargetName&gt;' Importance='High' />
    <Message Text='&lt;TargetType&gt;$(OutputType)&lt;/TargetType&gt;' Importance='High' />
    <Message Text='&lt;Dependencies&gt;@(Reference)&lt;/Dependencies&gt;' Importance='High' />
    <Message Text='&lt;/SWETC&gt;' Importance='High' />
</Target>
"""


def inject_hook(project_text: str, hook: str) -> str:
    """Insert ``hook`` right before the last ``</Project>``."""
    index = project_text.rfind("</Project>")
    if index < 0:
        raise ValueError("no closing </Project> element")
    return project_text[:index] + hook + project_text[index:]


def extract_block(output: str) -> dict[str, str]:
    """Pull the ``<SWETC>…</SWETC>`` block out of msbuild output."""
    start = output.find(_BLOCK_START)
    end = output.find(_BLOCK_END, start)
    if start < 0 or end < 0:
        raise ValueError("no <SWETC> block in msbuild output")
    root = ET.fromstring(output[start:end + len(_BLOCK_END)])
    return {child.tag: (child.text or "").strip() for child in root}


class MsBuildProjectParser(BaseProjectParser):
    """Shared msbuild invocation for the Visual Studio project formats."""

    hook: str = ""

    def __init__(
        self,
        properties: dict[str, str] | None = None,
        msbuild: str = "msbuild",
        skip_dirs: list[str] | None = None,
    ):
        super().__init__(skip_dirs=skip_dirs)
        self.properties = {"Configuration": "Release", **(properties or {})}
        self.msbuild = msbuild

    def read_raw(self, file_path: Path) -> RawTarget:
        fields = self.evaluate(file_path)
        return self.raw_from_fields(fields)

    @abc.abstractmethod
    def raw_from_fields(self, fields: dict[str, str]) -> RawTarget:
        """Map the printed msbuild fields to a ``RawTarget``."""

    def evaluate(self, file_path: Path) -> dict[str, str]:
        """Run the hook target through msbuild and return the printed fields."""
        path = str(file_path)
        tmp_path = Path(path + TEMP_SUFFIX)
        try:
            content = Path(file_path).read_text(encoding="utf-8-sig")
            hooked = inject_hook(content, self.hook)
        except (OSError, ValueError) as e:
            raise ProjectParseError(path, str(e)) from e

        try:
            try:
                tmp_path.write_text(hooked, encoding="utf-8")
            except OSError as e:
                raise ProjectParseError(path, str(e)) from e
            argv = [self.msbuild, str(tmp_path), "/nologo", "/v:minimal", f"/t:{HOOK_TARGET}"]
            argv += [f"/p:{name}={value}" for name, value in self.properties.items()]
            result = run_tool(argv, cwd=tmp_path.parent)
        finally:
            tmp_path.unlink(missing_ok=True)

        if result.error is not None:
            raise ProjectParseError(path, str(result.error))
        if result.returncode != 0:
            raise ProjectParseError(path, f"msbuild exited with status {result.returncode}")
        try:
            return extract_block(result.stdout)
        except (ValueError, ET.ParseError) as e:
            raise ProjectParseError(path, str(e)) from e


class VcxprojParser(MsBuildProjectParser):
    project_format = ProjectFormat.VCXPROJ
    match_rules = (MatchRule.extension("vcxproj"),)
    hook = _VCXPROJ_HOOK

    def raw_from_fields(self, fields: dict[str, str]) -> RawTarget:
        kind = fields.get("ConfigurationType") or fields.get("TargetType", "")
        return RawTarget(
            name=fields.get("TargetName", ""),
            kind=kind,
            tokens=(fields.get("Dependencies", ""),),
        )


class CsprojParser(MsBuildProjectParser):
    project_format = ProjectFormat.CSPROJ
    match_rules = (MatchRule.extension("csproj"),)
    hook = _CSPROJ_HOOK

    def raw_from_fields(self, fields: dict[str, str]) -> RawTarget:
        # @(Reference) is ';'-joined; each item may carry ", Version=..." parts
        refs = [r for r in re.split(r"[;\n]", fields.get("Dependencies", "")) if r.strip()]
        return RawTarget(
            name=fields.get("TargetName", ""),
            kind=fields.get("TargetType", ""),
            tokens=tuple(refs),
        )
