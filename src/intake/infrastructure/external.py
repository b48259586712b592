"""
Intake External Resources
=========================

Loading of the keyword lexicon data file.

The file maps language -> category name -> list of keywords. YAML and
JSON are both accepted (JSON documents are valid YAML). The lexicon is
read once at startup and never reloaded.
"""

from pathlib import Path
from typing import Dict, List

import yaml
from pydantic import RootModel, ValidationError

from src.intake.domain import Lexicon
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class LexiconDocument(RootModel[Dict[str, Dict[str, List[str]]]]):
    """Schema of the keyword lexicon file."""


def load_lexicon(path: Path) -> Lexicon:
    """
    Load the keyword lexicon.

    A missing, unreadable or malformed file never stops the service: the
    error is logged and an empty lexicon is returned, so classification
    always misses and submissions fall back to the default category.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        document = LexiconDocument.model_validate(data)
    except FileNotFoundError:
        logger.error("Keyword lexicon file not found, classification disabled", extra={"path": str(path)})
        return Lexicon.empty()
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logger.error(
            "Keyword lexicon could not be loaded, classification disabled",
            extra={"path": str(path), "error": str(e)}
        )
        return Lexicon.empty()

    lexicon = Lexicon.from_mapping(document.root)
    logger.info(
        "Keyword lexicon loaded",
        extra={
            "path": str(path),
            "languages": list(lexicon.languages),
            "categories": {lang: lexicon.category_count(lang) for lang in lexicon.languages}
        }
    )
    return lexicon
