import boa


def fund_from(fund_me, funders, value):
    for funder in funders:
        fund_me.fund(value=value, sender=funder)


def filter_logs(contract, event_name, _strict=False):
    return [
        e for e in contract.get_logs(strict=_strict) if type(e).__name__ == event_name
    ]


def balance_of(contract_or_address):
    return boa.env.get_balance(getattr(contract_or_address, "address", contract_or_address))
