"""
Tests pour les modules core.search.scoring et core.search.language.
"""

from book_tracker.core.search.language import looks_like_portuguese
from book_tracker.core.search.scoring import score


class TestLooksLikePortuguese:
    """Tests pour looks_like_portuguese."""

    def test_publisher_keyword(self, make_book):
        book = make_book("Untitled", "Nobody", publisher="Companhia das Letras")
        assert looks_like_portuguese(book) is True

    def test_publisher_keyword_is_case_insensitive(self, make_book):
        book = make_book("Untitled", "Nobody", publisher="EDITORA ÁTICA")
        assert looks_like_portuguese(book) is True

    def test_function_word_in_title(self, make_book):
        book = make_book("Memórias de um Sargento", "Nobody")
        assert looks_like_portuguese(book) is True

    def test_function_word_equal_to_short_title_is_ignored(self, make_book):
        # "de " + 2 caractères: pas assez long pour compter
        book = make_book("de x", "Nobody")
        assert looks_like_portuguese(book) is False

    def test_surname_in_author(self, make_book):
        book = make_book("Untitled", "Maria Ribeiro")
        assert looks_like_portuguese(book) is True

    def test_english_book(self, make_book):
        book = make_book("Nineteen Eighty-Four", "George Orwell", publisher="Penguin")
        assert looks_like_portuguese(book) is False


class TestScore:
    """Tests pour score."""

    def test_exact_title(self, make_book):
        book = make_book("1984", "George Orwell")
        assert score(book, "1984") == 100

    def test_partial_title(self, make_book):
        book = make_book("1984 (Annotated)", "George Orwell")
        assert score(book, "1984") == 50

    def test_exact_author_is_case_insensitive(self, make_book):
        book = make_book("Animal Farm", "George Orwell")
        assert score(book, "GEORGE ORWELL") == 80

    def test_partial_author(self, make_book):
        book = make_book("Animal Farm", "George Orwell")
        assert score(book, "orwell") == 40

    def test_signals_add_up(self, make_book):
        book = make_book("Machado de Assis", "Machado de Assis")
        # titre exact + auteur exact + bonus langue ("de " dans le titre)
        assert score(book, "machado de assis") == 200

    def test_no_match(self, make_book):
        book = make_book("Animal Farm", "George Orwell")
        assert score(book, "Dune") == 0

    def test_is_deterministic(self, make_book):
        book = make_book("A Hora da Estrela", "Clarice Lispector")
        assert score(book, "hora") == score(book, "hora") == 70
