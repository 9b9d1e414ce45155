"""Order identifier generation."""

import random
import string
import time


def generate_order_id() -> str:
    """Generate an order identifier for a new checkout.

    Not checked against the payment store; collisions need the same
    millisecond and the same random suffix.

    Returns:
        str: Order id like 'ORDER_1718000000000_A3B7K9'
    """
    millis = time.time_ns() // 1_000_000
    random_part = "".join(random.choices(string.ascii_uppercase + string.digits, k=6))
    return f"ORDER_{millis}_{random_part}"
