"""
Searchine workspace: the per-corpus directory holding the persisted registry
and term index, and the operations behind each command.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from tqdm import tqdm

from searchine.collection import CorpusChanges, Entry, Registry, ReverseRegistry
from searchine.index import TermIndex
from searchine.preprocessing import Tokenizer
from searchine.utils.corpus import walk_corpus

logger = logging.getLogger(__name__)


class Workspace:
    """
    Indexing session over one corpus root directory.

    Layout:
        <root>/<workspace_dir>/<collection_file>  registry
        <root>/<workspace_dir>/<index_file>       term index
    """

    def __init__(self, root_dir: Union[str, Path], config):
        """
        Initialize workspace for a corpus.

        Args:
            root_dir: Corpus root directory
            config: Hydra configuration object
        """
        self.config = config
        self.root_dir = Path(root_dir).resolve()
        self.workspace_dir = self.root_dir / config.paths.workspace_dir
        self.collection_file = self.workspace_dir / config.paths.collection_file
        self.index_file = self.workspace_dir / config.paths.index_file
        self.tokenizer = Tokenizer(config)

    def exists(self) -> bool:
        return self.workspace_dir.is_dir()

    def _require(self) -> None:
        if not self.exists():
            raise FileNotFoundError(
                f"No searchine workspace in {self.root_dir}. Run 'init' first."
            )

    def init(self) -> Path:
        """
        Create the workspace with an empty registry and term index.

        Returns:
            Path of the workspace directory
        """
        if self.exists():
            raise FileExistsError(f"Workspace already exists: {self.workspace_dir}")

        self.workspace_dir.mkdir(parents=True)
        Registry(self.root_dir).write_to_file(self.collection_file)
        TermIndex().write_to_file(self.index_file)

        logger.info(f"Initialized workspace at {self.workspace_dir}")
        return self.workspace_dir

    def walk(self) -> List[Path]:
        """List the corpus documents currently on disk."""
        return walk_corpus(
            self.root_dir,
            extensions=self.config.corpus.extensions,
            include_hidden=self.config.corpus.include_hidden,
            exclude=[self.workspace_dir]
        )

    def load_registry(self) -> Registry:
        self._require()
        return Registry.from_file(self.collection_file)

    def load_index(self) -> TermIndex:
        self._require()
        return TermIndex.from_file(self.index_file)

    def index_corpus(self) -> CorpusChanges:
        """
        Bring the registry in line with the documents on disk.

        New documents get document ids; vanished documents are removed.
        Modified documents keep their entry until the next index() run.

        Returns:
            Changes found by the walk
        """
        registry = self.load_registry()
        changes = registry.diff(self.walk())

        for path in changes.removed:
            registry.remove(path)
        for path in changes.added:
            registry.insert(path)

        registry.write_to_file(self.collection_file)
        logger.info(
            f"Corpus registry updated: {len(changes.added)} added, "
            f"{len(changes.removed)} removed, {len(registry)} documents"
        )
        return changes

    def list_corpus(self) -> List[Tuple[Path, Entry]]:
        """List registered documents ordered by document id."""
        registry = self.load_registry()
        return sorted(registry, key=lambda item: item[1])

    def index(self) -> CorpusChanges:
        """
        Incrementally index the corpus.

        Added documents are registered and indexed. Modified documents are
        removed and re-inserted, which gives them a new document id, then
        re-indexed. Removed documents lose their postings and registry entry.
        Registered documents without postings (e.g. from index_corpus) are
        indexed as well.

        Returns:
            Changes found by the walk
        """
        registry = self.load_registry()
        term_index = self.load_index()
        changes = registry.diff(self.walk())

        for path in changes.removed:
            entry = registry.remove(path)
            term_index.remove_document(entry.document_id)

        for path in changes.modified:
            entry = registry.remove(path)
            term_index.remove_document(entry.document_id)
            registry.insert(path)

        for path in changes.added:
            registry.insert(path)

        # Postings of documents the registry no longer knows
        registered = {entry.document_id: path for path, entry in registry}
        for document_id in term_index.document_ids() - set(registered):
            term_index.remove_document(document_id)

        pending = sorted(set(registered) - term_index.document_ids())
        indexed = 0
        for document_id in tqdm(
            pending,
            desc="Indexing documents",
            disable=not self.config.indexing.show_progress
        ):
            path = registered[document_id]
            try:
                text = path.read_text(encoding='utf-8', errors='replace')
            except OSError as e:
                logger.error(f"Error reading document {path}: {e}")
                continue

            term_index.add_document(document_id, self.tokenizer.tokenize(text))
            indexed += 1

        registry.write_to_file(self.collection_file)
        term_index.write_to_file(self.index_file)

        logger.info(
            f"Indexed {indexed} documents ({len(changes.added)} added, "
            f"{len(changes.modified)} modified, {len(changes.removed)} removed)"
        )
        return changes

    def status(self) -> CorpusChanges:
        """
        Report what index() would do, without writing anything.

        Registered documents that have not been indexed yet are reported
        as added, unless they are already reported as removed or modified.
        Each path appears in at most one list.
        """
        registry = self.load_registry()
        term_index = self.load_index()
        changes = registry.diff(self.walk())

        indexed = term_index.document_ids()
        already_reported = set(changes.removed) | set(changes.modified)
        unindexed = {
            path for path, entry in registry
            if entry.document_id not in indexed and path not in already_reported
        }
        return CorpusChanges(
            added=sorted(set(changes.added) | unindexed),
            removed=changes.removed,
            modified=changes.modified
        )

    def search(self, query: str, top_n: Optional[int] = None) -> List[Path]:
        """
        Find the documents containing every term of the query.

        Results are ordered by document id.

        Args:
            query: Free-text query
            top_n: Maximum number of results (defaults to config search.top_n)

        Returns:
            Paths of the matching documents
        """
        if top_n is None:
            top_n = self.config.search.top_n
        if top_n <= 0:
            raise ValueError(f"top_n must be positive, got {top_n}")

        term_index = self.load_index()
        terms = self.tokenizer.tokenize(query)
        matches = term_index.match_all(terms)

        reverse = ReverseRegistry.from_file(self.collection_file)
        results = []
        for document_id in matches:
            path = reverse.get_path(document_id)
            if path is None:
                logger.warning(f"Document id {document_id} is not in the registry; run 'index'")
                continue
            results.append(path)
            if len(results) >= top_n:
                break

        logger.debug(f"Query {query!r} -> terms {terms}: {len(matches)} matches")
        return results
