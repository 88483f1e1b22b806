"""Sample application used across the test suite."""

from typing import Any

from flywheel import Application, Controller, Loader, configures


class SampleController(Controller):
    pass


class SampleApplication(Application):
    """Application recording the order in which its hooks run."""

    def __init__(self, *args: Any, **kwargs: Any):
        self.calls: list[str] = []
        super().__init__(*args, **kwargs)

    def pre_init(self) -> None:
        self.calls.append("pre_init")

    def init(self) -> None:
        self.calls.append("init")

    def after_init(self) -> None:
        self.calls.append("after_init")

    @configures("session_name")
    def set_session_name(self, name: str) -> None:
        self.calls.append(f"set_session_name:{name}")
        self.session_name = name

    def before_run(self) -> None:
        self.calls.append("before_run")

    def run(self) -> str:
        self.calls.append("run")
        return "ran"

    def after_run(self) -> None:
        self.calls.append("after_run")


class RecordingLoader(Loader):
    """Loader recording alias imports instead of performing them."""

    def __init__(self) -> None:
        super().__init__()
        self.imported: list[str] = []

    def import_alias(self, alias: str) -> str:
        self.imported.append(alias)
        return alias
