"""
Corpus loader for line-delimited text files.

Each non-blank line of the corpus file is one document.
"""

from pathlib import Path
from typing import Union

from ragbot.core.exceptions import CorpusLoadError
from ragbot.core.logging import get_logger

logger = get_logger(__name__)


def split_lines(content: str) -> list[str]:
    """Split raw text into documents, dropping blank lines."""
    return [line.strip() for line in content.splitlines() if line.strip()]


def load_corpus(path: Union[str, Path], encoding: str = "utf-8") -> list[str]:
    """
    Load corpus documents from a text file.

    Args:
        path: Path to the corpus file, relative to the working directory
        encoding: File encoding

    Returns:
        List of document texts in file order

    Raises:
        CorpusLoadError: If the file is missing or cannot be decoded
    """
    corpus_path = Path(path)

    try:
        content = corpus_path.read_text(encoding=encoding)
    except FileNotFoundError:
        raise CorpusLoadError(
            message=f"Corpus file not found: {corpus_path}",
            details={"path": str(corpus_path.resolve())},
        )
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusLoadError(
            message=f"Failed to read corpus file: {str(e)}",
            details={"path": str(corpus_path)},
        )

    documents = split_lines(content)
    logger.info(f"Loaded {len(documents)} documents from {corpus_path}")

    if not documents:
        logger.warning(f"Corpus file {corpus_path} contains no documents")

    return documents
