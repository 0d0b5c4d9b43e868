"""Injector factory: bind configuration once, transform many documents.

`build_injector()` performs every fallible, document-independent step up
front (template read, fragment extraction, CSP composition). The returned
`Injector` only does in-memory text substitution per document.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Optional

from cordova_inject.csp import compose_csp
from cordova_inject.filtering import GlobFilter
from cordova_inject.fragments import extract_fragments
from cordova_inject.model import Document, InjectionConfig, InjectionFragmentSet
from cordova_inject.pipeline import Substitution, fragment_steps, shell_steps, transform_document
from cordova_inject.sizes import SizeReporter
from cordova_inject.util.console import eprint

TRIGGER_TITLE = "inject-cordova-trigger"
INDEX_TITLE = "inject-cordova-index"


class Injector:
    """Callable transform over a stream of documents."""

    def __init__(
        self,
        config: InjectionConfig,
        fragments: InjectionFragmentSet,
        csp_meta: str,
        *,
        emit: Callable[[str], None] = eprint,
        report_sizes: bool = True,
    ):
        self.config = config
        self.fragments = fragments
        self.csp_meta = csp_meta
        self.html_filter = GlobFilter(config.pattern)
        self._fragment_steps: List[Substitution] = fragment_steps(fragments)
        self._shell_steps: List[Substitution] = shell_steps(csp_meta)
        self._emit = emit
        self._report_sizes = report_sizes

    @property
    def steps(self) -> List[Substitution]:
        return self._fragment_steps + self._shell_steps

    def __call__(self, documents: Iterable[Document]) -> Iterator[Document]:
        trigger = SizeReporter(TRIGGER_TITLE, emit=self._emit, enabled=self._report_sizes)
        index = SizeReporter(INDEX_TITLE, emit=self._emit, enabled=self._report_sizes)

        def run(doc: Document) -> Document:
            doc = trigger.observe(transform_document(doc, self._fragment_steps))
            return index.observe(transform_document(doc, self._shell_steps))

        yield from self.html_filter.apply(documents, run)
        trigger.report()
        index.report()

    def transform_all(self, documents: Iterable[Document]) -> List[Document]:
        return list(self(documents))


def build_injector(
    config: Optional[InjectionConfig] = None,
    *,
    emit: Callable[[str], None] = eprint,
    report_sizes: bool = True,
) -> Injector:
    """
    Extract fragments and compose the CSP tag for `config`, then return the
    reusable transform.

    Raises TemplateNotFoundError / MalformedTemplateError before any document
    is seen. Each call re-reads the template.
    """
    cfg = config if config is not None else InjectionConfig()
    fragments = extract_fragments(cfg.template_path)
    csp_meta = compose_csp(cfg.source, cfg.connect_src, cfg.default_src, cfg.frame_src)
    return Injector(cfg, fragments, csp_meta, emit=emit, report_sizes=report_sizes)


__all__ = ["INDEX_TITLE", "Injector", "TRIGGER_TITLE", "build_injector"]
