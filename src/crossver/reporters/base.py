"""Abstract base class for matrix reporters."""

from abc import ABC, abstractmethod

from ..matrix.items import MatrixItem


class Reporter(ABC):
    """Abstract base class for emitting generated matrices."""

    @abstractmethod
    def output(self, matrix1: list[MatrixItem], matrix2: list[MatrixItem]) -> None:
        """Emit both matrices.

        Parameters
        ----------
        matrix1 : list[MatrixItem]
            Jobs for the first matrix
        matrix2 : list[MatrixItem]
            Jobs for the second matrix, possibly empty
        """
