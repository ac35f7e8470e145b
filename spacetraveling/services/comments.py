import weakref
from typing import Dict, List, Protocol

from markupsafe import Markup, escape

UTTERANCES_SRC = "https://utteranc.es/client.js"


class ScriptHost(Protocol):
    def append_script(self, src: str, attributes: Dict[str, str]) -> None: ...


class PageScripts:
    """Script host for a rendered page; the template outputs whatever was appended."""

    def __init__(self):
        self.scripts: List[Dict[str, str]] = []

    def append_script(self, src: str, attributes: Dict[str, str]) -> None:
        self.scripts.append({"src": src, **attributes})

    def render(self) -> Markup:
        tags = []
        for script in self.scripts:
            attrs = " ".join(f'{name}="{escape(value)}"' for name, value in script.items())
            tags.append(f"<script {attrs} async></script>")
        return Markup("\n".join(tags))


class UtterancesComments:
    """
    utterances comment widget.
    ``mount`` attaches the widget script once per host; mounting an already
    mounted host does nothing until it is unmounted.
    """

    def __init__(
        self,
        repo: str,
        theme: str = "github-dark",
        issue_term: str = "pathname",
        src: str = UTTERANCES_SRC,
    ):
        self.repo = repo
        self.theme = theme
        self.issue_term = issue_term
        self.src = src
        self._mounted = weakref.WeakSet()

    def script_attributes(self) -> Dict[str, str]:
        return {
            "crossorigin": "anonymous",
            "repo": self.repo,
            "issue-term": self.issue_term,
            "theme": self.theme,
        }

    def mount(self, host: ScriptHost) -> bool:
        if host in self._mounted:
            return False
        host.append_script(self.src, self.script_attributes())
        self._mounted.add(host)
        return True

    def unmount(self, host: ScriptHost) -> None:
        self._mounted.discard(host)

    def is_mounted(self, host: ScriptHost) -> bool:
        return host in self._mounted
