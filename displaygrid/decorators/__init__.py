"""Table decorators for displaygrid.

Available decorators:
    - TableDecorator: base class with neutral hooks
    - NullDecorator: used when no decorator is given (hides repeated group values)
    - TotalsDecorator: subtotal rows at group ends and a grand total row
"""

from displaygrid.decorators.base import NullDecorator, RowContext, TableDecorator
from displaygrid.decorators.totals import TotalsDecorator

__all__ = [
    "TableDecorator",
    "RowContext",
    "NullDecorator",
    "TotalsDecorator",
]
