# ABOUTME: Builds copy-pasteable AWS CLI commands for manual mode
# ABOUTME: Renders one parameter per line so users can review before running

"""AWS CLI command rendering."""

S3API = "s3api"
SECRETS_MANAGER = "secretsmanager"

LINE_SEPARATOR = " \\\n\t"


class AwsCommandBuilder:
    """Fluent builder for a single ``aws <service> <command>`` invocation."""

    def __init__(self, service: str):
        self.service = service
        self.command = None
        self.params: list[tuple[str, str]] = []
        self.tags: dict[str, str] = {}

    def set_command(self, command: str) -> "AwsCommandBuilder":
        self.command = command
        return self

    def add_param(self, name: str, value: str) -> "AwsCommandBuilder":
        """Add ``--name value``; empty values are skipped."""
        if value:
            self.params.append((name, value))
        return self

    def add_tags(self, tags: dict[str, str]) -> "AwsCommandBuilder":
        self.tags.update(tags)
        return self

    def build(self) -> str:
        if not self.command:
            raise ValueError("AWS CLI command is not set")

        parts = [f"aws {self.service} {self.command}"]
        parts.extend(f"--{name} {value}" for name, value in self.params)
        if self.tags:
            rendered_tags = " ".join(f"Key={key},Value={value}" for key, value in self.tags.items())
            parts.append(f"--tags {rendered_tags}")
        return LINE_SEPARATOR.join(parts)


def join_commands(commands: list[str]) -> str:
    """Join commands into a script-like block."""
    return "\n\n".join(commands)
