"""HTTP repositories - Plain HTTP downloads."""

from repositories.http.results_repository import ResultsRepository

__all__ = ["ResultsRepository"]
