from types import SimpleNamespace

from core.utils.decorators import storage_event_handler


def context() -> SimpleNamespace:
    return SimpleNamespace(aws_request_id="req-1")


class TestStorageEventHandler:
    def test_returns_handler_result(self) -> None:
        @storage_event_handler
        def handler(event, context):
            return {"records": 1, "completed": 1, "failed": 0, "skipped": 0}

        assert handler({"Records": [{}]}, context())["completed"] == 1

    def test_malformed_event_is_reported_not_raised(self) -> None:
        @storage_event_handler
        def handler(event, context):
            raise KeyError("s3")

        result = handler({"Records": [{}, {}]}, context())

        assert result == {
            "records": 2,
            "completed": 0,
            "failed": 2,
            "skipped": 0,
            "error": "KeyError",
        }

    def test_unexpected_error_is_reported_not_raised(self) -> None:
        @storage_event_handler
        def handler(event, context):
            raise RuntimeError("boom")

        result = handler({}, context())

        assert result["records"] == 0
        assert result["error"] == "RuntimeError"

    def test_non_dict_event(self) -> None:
        @storage_event_handler
        def handler(event, context):
            return event.get("Records")

        result = handler(["not", "a", "dict"], context())

        assert result["error"] == "AttributeError"

    def test_preserves_function_name(self) -> None:
        @storage_event_handler
        def my_handler(event, context):
            return {}

        assert my_handler.__name__ == "my_handler"
