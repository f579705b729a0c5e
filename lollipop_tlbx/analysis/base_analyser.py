"""Base analyzer class for the computation steps behind a lollipop chart."""

from abc import ABC, abstractmethod
from typing import Any


class BaseAnalyser(ABC):
    """Abstract base class for the pure computation steps of the toolbox.

    All analyzers must:
    1. Accept a DatasetView (plus their inputs) in their constructor
    2. Implement fit() to perform the computation and return self for chaining
    3. Implement result() to return a frozen dataclass with the outputs

    Analyzers never touch a figure; drawing lives in ``lollipop_tlbx.plotting``
    and only consumes the frozen results.

    ---

    ### Adding a New Analyzer

    ```python
    @dataclass(frozen=True)
    class MyResult:
        '''Results package for MyAnalyzer.'''
        summary: pd.DataFrame

    class MyAnalyzer(BaseAnalyser):
        def __init__(self, view: DatasetView):
            self._view = view
            self._result: MyResult | None = None

        def fit(self) -> "MyAnalyzer":
            self._result = MyResult(...)
            return self

        def result(self) -> MyResult:
            if self._result is None:
                raise ValueError("Call fit() first")
            return self._result
    ```

    Then add a ``make_my_analyzer`` factory method to ``TabularDataset``.
    """

    @abstractmethod
    def fit(self) -> "BaseAnalyser":
        """Run the computation.

        Returns:
            Self for method chaining.
        """
        ...

    @abstractmethod
    def result(self) -> Any:
        """Return the computed outputs as a frozen dataclass instance.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        ...
