"""Absolute reset links embedded in reset emails."""


class ResetLinkBuilder:
    def __init__(self, base_url: str, path_template: str = "/reset-password/{token}"):
        self.base_url = base_url.rstrip("/")
        self.path_template = path_template

    def build(self, token: str) -> str:
        return self.base_url + self.path_template.format(token=token)
