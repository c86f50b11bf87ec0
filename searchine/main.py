#!/usr/bin/env python
"""
Main entry point for searchine, a local document search tool.
Uses Fire for CLI and Hydra for configuration management.
"""

import os
import logging
import fire
import hydra
from omegaconf import OmegaConf
from dotenv import load_dotenv

from searchine.workspace import Workspace

# Load .env variables and register resolver
load_dotenv()
if not OmegaConf.has_resolver("env"):
    OmegaConf.register_new_resolver("env", os.getenv)


class SearchineCLI:
    """CLI for searchine."""

    def __init__(self, config_path: str = "conf", config_name: str = "config"):
        """
        Initialize CLI with configuration.

        Args:
            config_path: Path to config directory, relative to this module
            config_name: Name of main config file
        """
        self.config_path = config_path
        self.config_name = config_name
        self.config = None
        self.logger = None

    def _init_config(self, overrides=None):
        """Initialize Hydra configuration."""
        with hydra.initialize(version_base=None, config_path=self.config_path):
            if overrides:
                self.config = hydra.compose(config_name=self.config_name, overrides=overrides)
            else:
                self.config = hydra.compose(config_name=self.config_name)

        # Setup logging
        logging.basicConfig(
            level=getattr(logging, self.config.logging.level),
            format=self.config.logging.format
        )
        self.logger = logging.getLogger(__name__)

    def _workspace(self, dir_path: str = None) -> Workspace:
        self._init_config()
        return Workspace(dir_path or os.getcwd(), self.config)

    def _open_workspace(self, dir_path: str = None):
        """Get an initialized workspace, or None after logging why not."""
        workspace = self._workspace(dir_path)
        if not workspace.exists():
            self.logger.error(
                f"No searchine workspace in {workspace.root_dir}. Run 'init' first."
            )
            return None
        return workspace

    def _log_changes(self, changes):
        for label, paths in (('added', changes.added),
                             ('modified', changes.modified),
                             ('removed', changes.removed)):
            for path in paths:
                self.logger.info(f"  {label:<9} {path}")

    def init(self, dir_path: str = None):
        """
        Create a searchine workspace in a directory.

        Args:
            dir_path: Corpus root (defaults to the current directory)
        """
        workspace = self._workspace(dir_path)
        try:
            workspace.init()
        except FileExistsError as e:
            self.logger.error(str(e))
            return False
        return True

    def index_corpus(self, dir_path: str = None):
        """
        Register new documents and forget vanished ones.

        Args:
            dir_path: Corpus root (defaults to the current directory)
        """
        workspace = self._open_workspace(dir_path)
        if workspace is None:
            return False

        changes = workspace.index_corpus()
        self._log_changes(changes)
        return True

    def list_corpus(self, dir_path: str = None):
        """
        List registered documents with their document ids.

        Args:
            dir_path: Corpus root (defaults to the current directory)
        """
        workspace = self._open_workspace(dir_path)
        if workspace is None:
            return False

        documents = workspace.list_corpus()

        self.logger.info("="*60)
        self.logger.info("CORPUS")
        self.logger.info("="*60)

        if not documents:
            self.logger.info("No documents registered.")
        else:
            for path, entry in documents:
                self.logger.info(f"{entry.document_id:>6}  {entry.modified.isoformat()}  {path}")
        return True

    def index(self, dir_path: str = None):
        """
        Incrementally index added, modified and removed documents.

        Args:
            dir_path: Corpus root (defaults to the current directory)
        """
        workspace = self._open_workspace(dir_path)
        if workspace is None:
            return False

        changes = workspace.index()
        self._log_changes(changes)
        return True

    def status(self, dir_path: str = None):
        """
        Show documents changed since the last index run.

        Args:
            dir_path: Corpus root (defaults to the current directory)
        """
        workspace = self._open_workspace(dir_path)
        if workspace is None:
            return False

        changes = workspace.status()

        if changes.is_clean:
            self.logger.info("Index is up to date.")
        else:
            self.logger.info(f"{len(changes)} changes since last index:")
            self._log_changes(changes)
        return True

    def search(self, query: str, dir_path: str = None, top_n: int = None):
        """
        Search the index for documents containing every query term.

        Args:
            query: Query string
            dir_path: Corpus root (defaults to the current directory)
            top_n: Maximum number of results to return
        """
        workspace = self._open_workspace(dir_path)
        if workspace is None:
            return False

        results = workspace.search(query, top_n=top_n)

        self.logger.info(f"Query: {query}")
        self.logger.info(f"Total Hits: {len(results)}")
        for i, path in enumerate(results, 1):
            self.logger.info(f"{i}. {path}")
        return True


def main():
    """Main entry point."""
    fire.Fire(SearchineCLI)


if __name__ == "__main__":
    main()
