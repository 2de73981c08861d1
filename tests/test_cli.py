"""
Tests pour le module CLI.
"""

import logging
from unittest.mock import MagicMock, patch

from book_tracker.cli import cli_search, print_search_summary
from book_tracker.core.models import Source


class TestCliSearch:
    """Tests pour cli_search."""

    @patch("book_tracker.cli.SearchService")
    def test_cli_search_general(self, mock_service_class, make_book):
        """Test recherche générale."""
        mock_service = MagicMock()
        mock_service_class.return_value = mock_service
        mock_service.search_general.return_value = [make_book()]

        result = cli_search("Dom Casmurro")

        assert len(result) == 1
        mock_service.search_general.assert_called_once_with("Dom Casmurro", portuguese_only=True)
        mock_service.search_by_author.assert_not_called()

    @patch("book_tracker.cli.SearchService")
    def test_cli_search_by_author_all_languages(self, mock_service_class):
        """Test recherche par auteur sans filtre de langue."""
        mock_service = MagicMock()
        mock_service_class.return_value = mock_service
        mock_service.search_by_author.return_value = []

        cli_search("Clarice Lispector", by_author=True, portuguese_only=False)

        mock_service.search_by_author.assert_called_once_with(
            "Clarice Lispector", portuguese_only=False
        )

    @patch("book_tracker.cli.SearchService")
    def test_cli_search_logs_lazy_arguments(self, mock_service_class, caplog):
        """Les messages de log passent la requête en argument, pas formatée d'avance."""
        mock_service_class.return_value.search_general.return_value = []

        with caplog.at_level(logging.INFO, logger="book_tracker.cli"):
            cli_search("Vidas Secas")

        records = [r for r in caplog.records if r.name == "book_tracker.cli"]
        assert records[0].args == ("Vidas Secas", False)
        assert records[1].getMessage() == "CLI mode - 0 result(s)"


class TestPrintSearchSummary:
    """Tests pour print_search_summary."""

    def test_print_empty_list(self, capsys):
        """Test affichage avec liste vide."""
        print_search_summary([])

        captured = capsys.readouterr()
        assert "Livres trouvés: 0" in captured.out

    def test_print_with_results(self, capsys, make_book):
        """Test affichage avec résultats."""
        books = [
            make_book(
                "Dom Casmurro",
                "Machado de Assis",
                score=120,
                isbn="9788535902775",
                page_count=256,
                categories=("Fiction",),
                source=Source.OPEN_LIBRARY,
            ),
            make_book("Quincas Borba", "Machado de Assis", score=40),
        ]

        print_search_summary(books)

        captured = capsys.readouterr()
        assert "Livres trouvés: 2" in captured.out
        assert "1. Dom Casmurro [120]" in captured.out
        assert "ISBN: 9788535902775" in captured.out
        assert "Source: Open Library" in captured.out
        assert "2. Quincas Borba [40]" in captured.out
