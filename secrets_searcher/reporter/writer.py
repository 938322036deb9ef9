"""Write a secrets report to disk as HTML and per-secret files."""

from __future__ import annotations

import os
import shutil
import threading
from collections.abc import Iterable
from datetime import datetime

import jinja2
import yaml

from secrets_searcher.manip.filters import SliceFilter
from secrets_searcher.reporter.model import (
    ReportData,
    SecretData,
    SecretFilter,
    build_report_data,
)

_TEMPLATE = """<!DOCTYPE html>
{%- macro link(l) -%}
<a href="{{ l.url }}" title="{{ l.tooltip }}">{{ l.label }}</a>
{%- endmacro -%}
{%- macro extra_row(e) -%}
<div class="row{% if e.debug %} debug{% endif %}">
  <div class="col-2 label">{{ e.header }}</div>
  <div class="col-10">
  {%- if e.link %}{{ link(e.link) }}
  {%- elif e.code %}<pre><code>{{ e.value }}</code></pre>
  {%- else %}{{ e.value }}{% endif -%}
  </div>
</div>
{%- endmacro -%}
{%- macro secret_rows(s) -%}
<div class="secret expander row">
  <div class="col-5 label"><a href="#" class="expander-link"></a> Secret {{ s.id }}</div>
  <div class="col-7"><pre><code>{{ s.finding.before_code }}<span class="code">{{ s.finding.code_no_breaks }}</span>{{ s.finding.after_code }}</code></pre></div>
</div>
<div class="expander-target expander-collapsed">
  <div class="row">
    <div class="col-2 label">Secret value</div>
    <div class="col-10"><pre><code>{{ s.value }}</code></pre></div>
  </div>
  {% for e in s.extras %}{{ extra_row(e) }}{% endfor %}
  {% for f in s.findings %}
  <div class="finding expander row">
    <div class="col-2 label"><a href="#" class="expander-link"></a> Finding</div>
    <div class="col-10">{{ f.commit_date.strftime("%m/%d/%Y") }} / {{ link(f.repo_link) }} / {{ link(f.file_line_link) }}</div>
  </div>
  <div class="expander-target expander-collapsed">
    <div class="row"><div class="col-2 label">Processor</div><div class="col-10">{{ f.processor_name }}</div></div>
    <div class="row"><div class="col-2 label">Repo</div><div class="col-10">{{ link(f.repo_link) }}</div></div>
    <div class="row"><div class="col-2 label">Commit</div><div class="col-10">{{ link(f.commit_hash_link) }}</div></div>
    <div class="row"><div class="col-2 label">Date</div><div class="col-10">{{ f.commit_date.strftime("%m/%d/%Y %H:%M:%S") }}</div></div>
    <div class="row"><div class="col-2 label">File</div><div class="col-10">{{ link(f.file_line_link) }}</div></div>
    <div class="row"><div class="col-2 label">Author</div><div class="col-10">{{ f.commit_author_email }}</div></div>
    <div class="row"><div class="col-2 label">Code</div><div class="col-10"><pre><code>{{ f.before_code }}<span class="code">{{ f.code }}</span>{{ f.after_code }}</code></pre></div></div>
    {% for e in f.extras %}{{ extra_row(e) }}{% endfor %}
  </div>
  {% endfor %}
</div>
{%- endmacro %}
<html lang="en">
<head>
<meta charset="UTF-8">
<title>Search Secrets Report {{ data.report_date.strftime("%m/%d/%Y %H:%M:%S") }}</title>
<style>
body { font-family: sans-serif; font-size: 14px; }
pre { margin: 0; background-color: #e9e9e9; padding: 3px 5px; }
.row { display: flex; margin-bottom: 5px; }
.col-2 { flex: 0 0 16%; } .col-5 { flex: 0 0 40%; } .col-7 { flex: 0 0 58%; } .col-10 { flex: 0 0 83%; }
.label { font-weight: bold; }
.code { text-decoration: underline dotted red; }
.expander-collapsed { display: none; }
.expander-link { margin-right: 11px; text-decoration: none; }
.expander-target .label { padding-left: 50px; }
.expander-target .expander-target .label { padding-left: 85px; }
.footer { text-align: center; font-style: italic; margin-top: 20px; }
</style>
</head>
<body>
<h2>Search Secrets Report</h2>
<table class="report-info">
  <tr><th scope="row">Secrets found</th><td>{{ data.secret_count_msg }}</td></tr>
  <tr><th scope="row">Completed</th><td>{{ data.report_date.strftime("%m/%d/%Y %H:%M:%S") }}</td></tr>
  {% if data.secrets %}<tr><th scope="row">Repos with secrets</th><td>{{ data.repos | join(", ") }}</td></tr>{% endif %}
</table>
{% if not data.secrets %}
<div class="row"><div>No secrets were found.</div></div>
{% else %}
<p><a href="#" class="expand-all">Expand all</a> / <a href="#" class="collapse-all">Collapse all</a></p>
{% for group_name, secrets in data.secrets | dictsort %}
{% if group_name == data.default_group %}
{% for s in secrets %}{{ secret_rows(s) }}{% endfor %}
{% else %}
<div class="group expander row"><div><a href="#" class="expander-link"></a> {{ group_name }} ({{ secrets | length }} secrets)</div></div>
<div class="expander-target expander-collapsed">
{% for s in secrets %}{{ secret_rows(s) }}{% endfor %}
</div>
{% endif %}
{% endfor %}
{% endif %}
<p class="footer">Report generated by {{ link(data.app_link) }}</p>
<script>
document.querySelectorAll(".expander").forEach(function (expander) {
  var toggle = expander.querySelector(".expander-link");
  var target = expander.nextElementSibling;
  function update() { toggle.textContent = target.classList.contains("expander-collapsed") ? "[+]" : "[-]"; }
  toggle.addEventListener("click", function (evt) { evt.preventDefault(); target.classList.toggle("expander-collapsed"); update(); });
  expander.addEventListener("expand", function () { target.classList.remove("expander-collapsed"); update(); });
  expander.addEventListener("collapse", function () { target.classList.add("expander-collapsed"); update(); });
  update();
});
function fire(name) { document.querySelectorAll(".expander").forEach(function (e) { e.dispatchEvent(new Event(name)); }); }
document.querySelector(".expand-all") && document.querySelector(".expand-all").addEventListener("click", function (evt) { evt.preventDefault(); fire("expand"); });
document.querySelector(".collapse-all") && document.querySelector(".collapse-all").addEventListener("click", function (evt) { evt.preventDefault(); fire("collapse"); });
</script>
</body>
</html>
"""

_ENV = jinja2.Environment(autoescape=True, undefined=jinja2.StrictUndefined)
_REPORT_TEMPLATE = _ENV.from_string(_TEMPLATE)


def render_report(data: ReportData) -> str:
    """Render the report as an HTML page."""
    return _REPORT_TEMPLATE.render(data=data)


def default_filter(secret_id_filter: SliceFilter) -> SecretFilter:
    """Return a secret filter that checks the secret's ID."""

    def secret_filter(secret_data: SecretData) -> bool:
        return secret_id_filter.includes(secret_data.id)

    return secret_filter


def default_group_by(secret_data: SecretData) -> str:
    """Group by the rule of the first finding and, if known, its variable name."""
    finding = secret_data.finding
    key_value = ""
    for extra in finding.extras:
        if extra.key == "setter-key-value":
            key_value = extra.value
            for char in "-_.":
                key_value = key_value.replace(char, "")
            key_value = key_value.lower()
            break

    pieces = [f'Rule: "{finding.processor_name}"']
    if key_value:
        pieces.append(f'Variable Name: "{key_value}"')
    return " / ".join(pieces)


class Reporter:
    """Writes reports into a directory and archives copies of them."""

    def __init__(
        self,
        report_dir: str,
        report_archives_dir: str,
        secret_id_filter: SliceFilter | None = None,
    ) -> None:
        self.report_dir = str(report_dir)
        self.report_archives_dir = str(report_archives_dir)
        self.secrets_dir = os.path.join(self.report_dir, "secrets")
        self.report_file_path = os.path.join(self.report_dir, "report.html")
        self.filter: SecretFilter = default_filter(
            secret_id_filter if secret_id_filter is not None else SliceFilter()
        )
        self.group_by = default_group_by
        self._lock = threading.Lock()
        self._prepared_fs = False

    def build_report(
        self,
        secrets: Iterable[SecretData],
        app_url: str = "",
        enable_debug_output: bool = False,
    ) -> ReportData:
        """Build report data using this reporter's filter and grouping."""
        return build_report_data(
            secrets, app_url, enable_debug_output, self.group_by, self.filter
        )

    def prepare_filesystem(self) -> None:
        """Empty the report directory and make sure the archive directory exists."""
        if self._prepared_fs:
            return
        shutil.rmtree(self.report_dir, ignore_errors=True)
        os.makedirs(self.report_dir, mode=0o700, exist_ok=True)
        os.makedirs(self.report_archives_dir, mode=0o700, exist_ok=True)
        self._prepared_fs = True

    def prepare_report(
        self,
        data: ReportData,
        create_file: bool = True,
        create_secret_files: bool = True,
        create_archive: bool = True,
    ) -> str | None:
        """Write the requested parts of a report.

        Returns the path of the archive copy when one was made.
        """
        with self._lock:
            if create_file:
                self.write_report_file(data)
            if create_secret_files:
                self.write_secret_files(data)
            if create_archive:
                stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
                archive_dir = os.path.join(self.report_archives_dir, f"report-{stamp}")
                shutil.copytree(self.report_dir, archive_dir, dirs_exist_ok=True)
                return archive_dir
        return None

    def write_report_file(self, data: ReportData) -> None:
        """Render the HTML report and move it into place."""
        os.makedirs(self.report_dir, mode=0o700, exist_ok=True)
        tmp_path = self.report_file_path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as handle:
            handle.write(render_report(data))
        os.replace(tmp_path, self.report_file_path)

    def write_secret_files(self, data: ReportData) -> None:
        """Write each secret's raw value and metadata file."""
        os.makedirs(self.secrets_dir, mode=0o700, exist_ok=True)
        for secrets in data.secrets.values():
            for secret in secrets:
                secret_dir = os.path.join(self.secrets_dir, secret.id)
                os.makedirs(secret_dir, mode=0o700, exist_ok=True)
                if secret.value_file_path:
                    parent = os.path.dirname(secret.value_file_path)
                    if parent:
                        os.makedirs(parent, mode=0o700, exist_ok=True)
                    with open(secret.value_file_path, "w", encoding="utf-8") as handle:
                        handle.write(secret.value)
                metadata_path = os.path.join(secret_dir, f"secret-{secret.id}.yaml")
                with open(metadata_path, "w", encoding="utf-8") as handle:
                    yaml.safe_dump(
                        secret.to_yaml_dict(),
                        handle,
                        sort_keys=False,
                        allow_unicode=True,
                    )