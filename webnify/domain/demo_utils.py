def format_number(value: int) -> str:
    """
    Format an integer with comma thousands separators, e.g. 12500 -> "12,500".
    """
    return f"{value:,}"


def add_numbers(num1, num2):
    return num1 + num2
