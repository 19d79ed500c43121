import copy

from scrabble_engine.dictionary import Dictionary, load_dictionary


class TestDictionary:

    def test_lookup_is_case_insensitive(self, dictionary):
        assert dictionary.is_valid_word("cat")
        assert dictionary.is_valid_word("CAT")
        assert "Cats" in dictionary

    def test_rejects_unknown_and_malformed(self, dictionary):
        assert not dictionary.is_valid_word("TCA")
        assert not dictionary.is_valid_word("A")
        assert not dictionary.is_valid_word("")
        assert not dictionary.is_valid_word("C4T")

    def test_copies_share_the_instance(self, dictionary):
        assert copy.deepcopy(dictionary) is dictionary
        assert copy.copy(dictionary) is dictionary

    def test_trie_prefixes(self, dictionary):
        assert dictionary.trie.is_prefix("CA")
        assert not dictionary.trie.is_prefix("CX")
        assert dictionary.trie.walk("CAT").is_terminal
        assert not dictionary.trie.walk("CA").is_terminal

    def test_from_words_filters(self):
        words = Dictionary.from_words(["ok", "a", "it's", "  dog  ", "ABCDEFGHIJKLMNOP"])
        assert len(words) == 2
        assert words.is_valid_word("DOG")


class TestLoading:

    def test_from_file(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("cat\ndog\nx\n", encoding="utf-8")
        words = Dictionary.from_file(str(path))
        assert len(words) == 2
        assert words.source == str(path)

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("qi\nza\n", encoding="utf-8")
        assert load_dictionary(str(path)).is_valid_word("ZA")

    def test_env_path(self, tmp_path, monkeypatch):
        path = tmp_path / "env_words.txt"
        path.write_text("jo\n", encoding="utf-8")
        monkeypatch.setenv("SCRABBLE_WORDS_PATH", str(path))
        assert load_dictionary().is_valid_word("JO")

    def test_falls_back_to_minimal_set(self, tmp_path, monkeypatch):
        def missing_corpus(cls):
            raise LookupError("words corpus not found")

        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("SCRABBLE_WORDS_PATH", raising=False)
        monkeypatch.setattr(Dictionary, "from_nltk", classmethod(missing_corpus))
        words = load_dictionary()
        assert words.source == "minimal"
        assert words.is_valid_word("QI")

    def test_empty_file_falls_through(self, tmp_path, monkeypatch):
        path = tmp_path / "empty.txt"
        path.write_text("\n", encoding="utf-8")
        monkeypatch.setattr(Dictionary, "from_nltk",
                            classmethod(lambda cls: Dictionary(["NLTK"], source="nltk:words")))
        assert load_dictionary(str(path)).source == "nltk:words"
