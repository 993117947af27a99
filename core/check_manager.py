from typing import Callable, Iterable, List

CheckFunc = Callable[..., Iterable]


class CheckManager:
    def __init__(self, data):
        self.data = data
        self.checks: List[CheckFunc] = []

    def add_check(self, check_func: CheckFunc):
        """Register a check group; groups run in registration order."""
        self.checks.append(check_func)

    def apply_all(self) -> list:
        """Run all registered check groups in order and collect their findings."""
        findings = []
        for check in self.checks:
            findings.extend(check(self.data))
        return findings
