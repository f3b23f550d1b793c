# services/portfolio/cost_basis.py


def new_basis(
    old_amount: float,
    old_basis: float,
    incoming_amount: float,
    incoming_price: float,
) -> float:
    """
    Weighted-average cost per unit after crediting a new lot.

    old_amount is the balance before the credit; incoming_amount is the lot.
    A zero total takes the incoming price as the basis.
    """
    total = old_amount + incoming_amount
    if total <= 0:
        return incoming_price
    return (old_amount * old_basis + incoming_amount * incoming_price) / total
