from typing import Dict, Tuple

class PinClassifier:
    """Maps known announcement lines to the text the bot posts and pins instead."""

    def __init__(self, table: Dict[str, str]):
        self.table = dict(table)

    def classify(self, raw: str) -> Tuple[bool, str]:
        cleaned = raw.strip()
        folded = cleaned.casefold()
        for trigger, replacement in self.table.items():
            if folded == trigger.strip().casefold():
                if replacement.strip() == "":
                    return True, cleaned
                return True, replacement
        return False, raw
