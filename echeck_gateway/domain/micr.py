"""MICR line formatting for the bottom strip of a printed check"""

# E-13B symbols as encoded in Unicode's OCR block
ON_US = "\u2448"  # ⑈
TRANSIT = "\u2446"  # ⑆


def encode_micr_line(check_number: str, routing_number: str, account_number: str) -> str:
    """
    Format the MICR line: check number, routing number, then account number.

    Fields are copied verbatim. Blank fields keep their symbols so the printed
    spacing never shifts.

    Example:
        ("1001", "021000021", "123456") → "⑈1001⑈ ⑆021000021⑆ 123456⑈"
    """
    return (
        f"{ON_US}{check_number}{ON_US} "
        f"{TRANSIT}{routing_number}{TRANSIT} "
        f"{account_number}{ON_US}"
    )
