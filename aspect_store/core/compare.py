"""
Dual-read comparison of old and new schema results.

Comparisons never raise. A mismatch is logged with DIFFERENT_RESULTS_TEMPLATE and
reported as False; callers keep using the old schema result either way.
"""

from typing import List, Optional, TypeVar, Union

from ..util.logging import DIFFERENT_RESULTS_TEMPLATE, logger
from .schema import ListResult

T = TypeVar("T")

REASON_ONE_NULL = "One of the results was null."
REASON_DIFFERENT_SIZES = "The results are different sizes."
REASON_DIFFERENT_ELEMENTS = "The elements in the old schema result do not match the elements in the new schema result."
REASON_LIST_RESULT = "Check preceding WARN logs for the reason that the ListResults are not equal"

__all__ = [
    "DIFFERENT_RESULTS_TEMPLATE",
    "compare_lists",
    "compare_list_results",
    "compare_results",
]


def compare_lists(result_old: Optional[List[T]], result_new: Optional[List[T]], method_name: str) -> bool:
    """
    Compare lists read from the old and new schema tables.

    Equal sizes plus old containing every element of new counts as equal.
    This is not a multiset check: duplicates can hide a difference.

    Args:
        result_old: Results from reading the old schema table
        result_new: Results from reading the new schema table
        method_name: Name of the calling method, for logging

    Returns:
        Boolean indicating equivalence
    """
    if result_old is None and result_new is None:
        return True
    if result_old is None or result_new is None:
        logger.log_dual_read_mismatch(method_name, REASON_ONE_NULL, result_old, result_new)
        return False
    if len(result_old) != len(result_new):
        logger.log_dual_read_mismatch(method_name, REASON_DIFFERENT_SIZES, result_old, result_new)
        return False
    if all(item in result_old for item in result_new):
        return True
    logger.log_dual_read_mismatch(method_name, REASON_DIFFERENT_ELEMENTS, result_old, result_new)
    return False


def compare_list_results(result_old: Optional[ListResult], result_new: Optional[ListResult], method_name: str) -> bool:
    """Compare paged results by full structural equality (values, paging fields, metadata)."""
    if result_old is None and result_new is None:
        return True
    if result_old is None or result_new is None:
        logger.log_dual_read_mismatch(method_name, REASON_ONE_NULL, result_old, result_new)
        return False
    if result_old == result_new:
        return True
    logger.log_dual_read_mismatch(method_name, REASON_LIST_RESULT, result_old, result_new)
    return False


def compare_results(result_old: Union[List, ListResult, None], result_new: Union[List, ListResult, None],
                    method_name: str) -> bool:
    """Compare either plain lists or ListResults, picking the comparison by argument type."""
    if isinstance(result_old, ListResult) or isinstance(result_new, ListResult):
        return compare_list_results(result_old, result_new, method_name)
    return compare_lists(result_old, result_new, method_name)
