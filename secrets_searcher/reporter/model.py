"""Data that a secrets report is built from."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from secrets_searcher.manip.text import make_one_line

DEFAULT_GROUP = "default"
LINE_BREAK_MARK = "↵"

SecretGrouper = Callable[["SecretData"], str]
SecretFilter = Callable[["SecretData"], bool]


@dataclass(frozen=True)
class LinkData:
    """A hyperlink shown in the report."""

    label: str
    url: str
    tooltip: str = ""

    def to_yaml_dict(self) -> dict[str, Any]:
        return {"label": self.label, "url": self.url}


@dataclass(frozen=True)
class ExtraData:
    """An additional piece of information attached to a secret or a finding."""

    key: str
    header: str = ""
    value: str = ""
    code: bool = False
    url: str = ""
    link: LinkData | None = None
    debug: bool = False

    def to_yaml_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "value": self.value,
            "url": self.url,
            "link": self.link.to_yaml_dict() if self.link is not None else None,
            "debug": self.debug,
        }


@dataclass(frozen=True)
class FindingData:
    """One place in a repository's history where a secret was found."""

    id: str
    processor_name: str
    repo_name: str
    repo_url: str
    commit_hash: str
    commit_url: str
    commit_date: datetime
    commit_author_name: str
    commit_author_email: str
    file_path: str
    file_line_url: str
    start_line_num: int
    end_line_num: int
    col_start_index: int
    col_end_index: int
    code: str
    before_code: str = ""
    after_code: str = ""
    file_basename: str = ""
    extras: tuple[ExtraData, ...] = ()

    @property
    def repo_link(self) -> LinkData:
        return LinkData(self.repo_name, self.repo_url)

    @property
    def commit_hash_link(self) -> LinkData:
        return LinkData(self.commit_hash, self.commit_url)

    @property
    def commit_hash_link_short(self) -> LinkData:
        return LinkData(self.commit_hash[:7], self.commit_url, self.commit_hash)

    @property
    def file_line_link(self) -> LinkData:
        label, _ = file_line_labels(self.file_path, self.start_line_num, self.col_start_index)
        return LinkData(label, self.file_line_url)

    @property
    def file_line_link_short(self) -> LinkData:
        label, short = file_line_labels(
            self.file_path, self.start_line_num, self.col_start_index
        )
        return LinkData(short, self.file_line_url, label)

    @property
    def code_no_breaks(self) -> str:
        return make_one_line(self.code, LINE_BREAK_MARK)

    @property
    def code_with_context(self) -> str:
        return self.before_code + self.code + self.after_code

    @property
    def code_show_guide(self) -> bool:
        return self.start_line_num == self.end_line_num

    def to_yaml_dict(self) -> dict[str, Any]:
        """Return the fields that go into a secret's metadata file."""
        return {
            "finding-id": self.id,
            "processor": self.processor_name,
            "repo": self.repo_link.to_yaml_dict(),
            "commit": self.commit_hash_link.to_yaml_dict(),
            "commit-date": self.commit_date.isoformat(),
            "commit-author": self.commit_author_name,
            "file-location": self.file_line_link.to_yaml_dict(),
            "col-start-index": self.col_start_index,
            "col-end-index": self.col_end_index,
            "file-basename": self.file_basename,
            "code": self.code_with_context,
            "extras": [extra.to_yaml_dict() for extra in self.extras],
        }


@dataclass(frozen=True)
class SecretData:
    """A secret value together with every finding of it."""

    id: str
    value: str
    findings: tuple[FindingData, ...]
    extras: tuple[ExtraData, ...] = ()
    value_file_path: str = ""

    def __post_init__(self) -> None:
        if not self.findings:
            raise ValueError(f"secret {self.id} has no findings")

    @property
    def value_len(self) -> int:
        return len(self.value)

    @property
    def finding(self) -> FindingData:
        """The earliest finding."""
        return self.findings[0]

    def to_yaml_dict(self) -> dict[str, Any]:
        """Return the fields that go into the secret's metadata file."""
        return {
            "secret-id": self.id,
            "value": self.value,
            "extras": [extra.to_yaml_dict() for extra in self.extras],
            "findings": [finding.to_yaml_dict() for finding in self.findings],
        }


@dataclass(frozen=True)
class ReportData:
    """Everything the report page shows."""

    report_date: datetime
    app_link: LinkData
    repos: list[str]
    secrets: dict[str, list[SecretData]]
    enable_debug_output: bool
    secret_count_msg: str
    default_group: str = DEFAULT_GROUP


def file_line_labels(path: str, start_line_num: int, start_index: int) -> tuple[str, str]:
    """Return the long and short labels of a file location."""
    suffix = f", line {start_line_num}, col {start_index + 1}"
    return path + suffix, os.path.basename(path) + suffix


def dev_filter_config(
    repo_name: str, processor: str, commit_hash: str, path: str, line: int
) -> str:
    """Return a configuration snippet that selects exactly one finding."""
    return (
        "  filter:\n"
        f"    repo: '{repo_name}'\n"
        f"    processor: '{processor}'\n"
        f"    commit: '{commit_hash}'\n"
        f"    path: '{path}'\n"
        f"    line: {line}\n"
    )


def extra_link(label: str, url: str) -> LinkData | None:
    """Return a link for an extra, or None when there is no URL."""
    return LinkData(label, url) if url else None


def raw_file_extra(
    secrets_dir: str, report_dir: str, secret_id: str, findings: Iterable[FindingData]
) -> tuple[str, ExtraData] | None:
    """Return the path of the secret's raw file and the extra linking to it.

    Returns None when no finding names a file.
    """
    basename = next((f.file_basename for f in findings if f.file_basename), "")
    if not basename:
        return None
    file_path = os.path.join(secrets_dir, secret_id, basename)
    relative = file_path.removeprefix(report_dir)[1:]
    extra = ExtraData(
        key="raw-file",
        header="Raw file",
        link=LinkData(label=basename, url=relative),
    )
    return file_path, extra


def build_secret_data(
    secret_id: str,
    value: str,
    extras: Iterable[ExtraData],
    findings: Iterable[FindingData],
    secrets_dir: str,
    report_dir: str,
) -> SecretData:
    """Assemble a secret with its findings ordered by commit date."""
    ordered = tuple(sorted(findings, key=lambda finding: finding.commit_date))
    if not ordered:
        raise ValueError(f"secret {secret_id} has no findings")
    all_extras = list(extras)
    file_path = ""
    raw = raw_file_extra(secrets_dir, report_dir, secret_id, ordered)
    if raw is not None:
        file_path, raw_extra = raw
        all_extras.append(raw_extra)
    return SecretData(
        id=secret_id,
        value=value,
        findings=ordered,
        extras=tuple(all_extras),
        value_file_path=file_path,
    )


def group_secrets(
    secrets: Iterable[SecretData], group_by: SecretGrouper
) -> dict[str, list[SecretData]]:
    """Group secrets by the name the grouper gives each."""
    groups: dict[str, list[SecretData]] = {}
    for secret in secrets:
        groups.setdefault(group_by(secret), []).append(secret)
    return groups


def repo_names(groups: Mapping[str, Iterable[SecretData]]) -> list[str]:
    """Return the sorted names of every repository with a finding."""
    return sorted(
        {
            finding.repo_name
            for secrets in groups.values()
            for secret in secrets
            for finding in secret.findings
        }
    )


def _with_debug(secret: SecretData, enabled: bool) -> SecretData:
    if enabled:
        findings = tuple(
            dataclasses.replace(
                finding,
                extras=finding.extras
                + (
                    ExtraData(
                        key="dev-filter",
                        header="Dev filter",
                        value=dev_filter_config(
                            finding.repo_name,
                            finding.processor_name,
                            finding.commit_hash,
                            finding.file_path,
                            finding.start_line_num,
                        ),
                        code=True,
                        debug=True,
                    ),
                ),
            )
            for finding in secret.findings
        )
        return dataclasses.replace(secret, findings=findings)

    findings = tuple(
        dataclasses.replace(
            finding, extras=tuple(e for e in finding.extras if not e.debug)
        )
        for finding in secret.findings
    )
    extras = tuple(e for e in secret.extras if not e.debug)
    return dataclasses.replace(secret, findings=findings, extras=extras)


def build_report_data(
    secrets: Iterable[SecretData],
    app_url: str,
    enable_debug_output: bool,
    group_by: SecretGrouper,
    secret_filter: SecretFilter | None = None,
) -> ReportData:
    """Filter and group secrets into the data of a report."""
    selected = [
        _with_debug(secret, enable_debug_output)
        for secret in secrets
        if secret_filter is None or secret_filter(secret)
    ]
    groups = group_secrets(selected, group_by)
    return ReportData(
        report_date=datetime.now(),
        app_link=LinkData(label=app_url, url=app_url),
        repos=repo_names(groups),
        secrets=groups,
        enable_debug_output=enable_debug_output,
        secret_count_msg=f"{len(selected)} secrets",
        default_group=DEFAULT_GROUP,
    )