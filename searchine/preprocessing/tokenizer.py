from typing import List
from nltk.tokenize import RegexpTokenizer


class Tokenizer:
    """Splits document text into index terms."""

    def __init__(self, config):
        """
        Initialize tokenizer with configuration.

        Args:
            config: Hydra config object with preprocessing settings
        """
        self.config = config
        self.lowercase = config.preprocessing.lowercase
        self.min_word_length = config.preprocessing.min_word_length
        self.max_word_length = config.preprocessing.max_word_length
        self._tokenizer = RegexpTokenizer(r'\w+')

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize text according to configuration.

        Args:
            text: Input text string

        Returns:
            List of tokens, in document order
        """
        if not text:
            return []

        if self.lowercase:
            text = text.lower()

        tokens = self._tokenizer.tokenize(text)

        # Filter by length
        return [
            token for token in tokens
            if self.min_word_length <= len(token) <= self.max_word_length
        ]
