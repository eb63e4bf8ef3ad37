# Integers are 64-bit signed throughout the language.
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


def in_int_range(val: int):
    return INT_MIN <= val <= INT_MAX
