"""Random word stream generation for word and timed modes."""

import logging
import random
import threading
from pathlib import Path
from typing import Dict, List, Optional

log = logging.getLogger("gti.words")

DEFAULT_WORDS = [
    "the", "quick", "brown", "fox", "jumps", "over", "lazy", "dog",
    "hello", "world", "typing", "speed", "test", "practice", "accuracy",
    "keyboard", "computer", "software", "development", "programming",
    "python", "language", "bubble", "tea", "terminal", "user", "interface",
]

# Language name -> word list file name inside the words directory
LANGUAGE_FILES = {
    "english": "eng",
    "spanish": "spa",
    "french": "fre",
    "german": "ger",
    "japanese": "jap",
    "russian": "ru",
    "italian": "ita",
    "portuguese": "por",
    "chinese": "chi",
    "arabic": "ara",
    "hindi": "hin",
    "korean": "kor",
    "dutch": "dut",
    "swedish": "swe",
    "czech": "cze",
    "danish": "dan",
    "finnish": "fin",
    "greek": "gre",
    "hebrew": "heb",
    "hungarian": "hun",
    "norwegian": "nor",
    "polish": "pol",
    "thai": "tha",
    "turkish": "tur",
    "random": "ran",
}


def is_language_supported(language: str) -> bool:
    return language in LANGUAGE_FILES


class WordGenerator:
    """Picks random words from per-language word lists.

    Word lists are plain text files, one word per line, named after
    LANGUAGE_FILES inside ``words_dir``. Lists are read once and cached.
    """

    def __init__(self, words_dir: Optional[Path] = None):
        """Initialize generator.

        Args:
            words_dir: Directory containing word list files; without it the
                built-in DEFAULT_WORDS list is used for every language
        """
        self.words_dir = Path(words_dir) if words_dir else None
        self._loaded: Dict[str, List[str]] = {}
        self._lock = threading.Lock()
        self._rng = random.Random()

    def load_words(self, language: str) -> List[str]:
        """Return the word list for a language, loading it on first use."""
        with self._lock:
            if language in self._loaded:
                return self._loaded[language]

            file_name = LANGUAGE_FILES.get(language, LANGUAGE_FILES["random"])
            words = self._read_word_file(file_name)
            if not words:
                words = DEFAULT_WORDS

            self._loaded[language] = words
            return words

    def _read_word_file(self, file_name: str) -> List[str]:
        if self.words_dir is None:
            return []

        path = self.words_dir / file_name
        try:
            with open(path, encoding="utf-8") as f:
                return [line.strip() for line in f if line.strip()]
        except OSError as e:
            log.debug(f"Word list {path} unavailable, using defaults: {e}")
            return []

    def generate_word(self, language: str = "english") -> str:
        """Pick one random word.

        The generator is reseeded from system entropy before every word.
        """
        self._rng.seed()
        words = self.load_words(language)
        return self._rng.choice(words)

    def generate_words(self, count: int, language: str = "english") -> str:
        """Generate ``count`` space-separated random words."""
        return " ".join(self.generate_word(language) for _ in range(max(0, count)))
