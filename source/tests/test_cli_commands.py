# ABOUTME: Tests for the rosa-oidc CLI commands
# ABOUTME: Runs commands through cleo's CommandTester with fake AWS and OCM clients

import json

import pytest
from cleo.testers.command_tester import CommandTester

from rosa_oidc_config.cli import create_application
from rosa_oidc_config.config import Config, Profile
from rosa_oidc_config.ocm import OidcConfig

ROLE_ARN = "arn:aws:iam::123456789012:role/ManagedOpenShift-Installer-Role"
UNMANAGED_ISSUER = "https://foo-oidc-ab12.s3.us-east-1.amazonaws.com"


@pytest.fixture(autouse=True)
def cli_environment(monkeypatch, tmp_path, isolated_config):
    """Run every command from an empty directory with a wide console."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("COLUMNS", "250")
    return workdir


def run(command_name: str, args: str = "") -> int:
    tester = CommandTester(create_application().find(command_name))
    return tester.execute(args)


def install_clients(monkeypatch, module: str, aws_client=None, ocm_client=None) -> list:
    """Replace the client factories of a command module; returns what was built."""
    built = []

    def fake_create_aws_client(region, profile):
        built.append(("aws", region))
        return aws_client

    def fake_create_ocm_client(profile):
        built.append(("ocm", profile.name))
        return ocm_client

    monkeypatch.setattr(f"{module}.create_aws_client", fake_create_aws_client, raising=False)
    monkeypatch.setattr(f"{module}.create_ocm_client", fake_create_ocm_client)
    return built


class TestCreateRejectedOptions:
    """Conflicting options fail before any file or remote call"""

    @pytest.mark.parametrize(
        "args",
        [
            "--raw-files --mode auto --region us-east-1",
            "--raw-files --managed --region us-east-1",
            f"--raw-files --installer-role-arn {ROLE_ARN} --region us-east-1",
            "--managed --prefix foo --region us-east-1",
            f"--managed --installer-role-arn {ROLE_ARN} --region us-east-1",
            "--mode automatic --region us-east-1",
            "--mode auto --prefix abcdefghijklmnop --region us-east-1",
            "--mode auto --installer-role-arn not-an-arn --region us-east-1",
            "--mode auto --prefix Foo --region us-east-1",
            f"--mode auto --prefix Foo --installer-role-arn {ROLE_ARN} --region us-east-1",
            f"--mode manual --prefix Foo --installer-role-arn {ROLE_ARN} --region us-east-1",
            "--mode auto --region bogus",
        ],
    )
    def test_rejected(self, monkeypatch, cli_environment, fast_keys, aws_client, ocm_client, args):
        built = install_clients(
            monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client, ocm_client=ocm_client
        )

        assert run("create oidc-config", args) == 1

        assert aws_client.calls == []
        assert ocm_client.calls == []
        assert list(cli_environment.iterdir()) == []
        assert built == []

    def test_conflict_message(self, monkeypatch, capsys, aws_client, ocm_client):
        install_clients(
            monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client, ocm_client=ocm_client
        )

        assert run("create oidc-config", "--raw-files --managed --region us-east-1") == 1
        assert "--raw-files param is not supported alongside --managed param" in capsys.readouterr().out

    def test_unknown_profile(self, monkeypatch, capsys, aws_client, ocm_client):
        install_clients(
            monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client, ocm_client=ocm_client
        )

        assert run("create oidc-config", "--raw-files --profile missing --region us-east-1") == 1
        assert "Profile 'missing' not found" in capsys.readouterr().out


class TestCreateLocalStrategies:
    """Raw files and manual mode"""

    def test_raw_files(self, monkeypatch, capsys, cli_environment, fast_keys, aws_client, ocm_client):
        built = install_clients(
            monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client, ocm_client=ocm_client
        )

        assert run("create oidc-config", "--raw-files --prefix foo --region us-east-1") == 0

        names = sorted(path.name for path in cli_environment.iterdir())
        assert len(names) == 3
        assert names[0].startswith("discovery-document-foo-oidc-")
        assert names[1].startswith("jwks-foo-oidc-")
        assert names[2].startswith("rosa-private-key-foo-oidc-")
        assert names[2].endswith(".key")
        assert built == []
        assert aws_client.calls == []
        assert ocm_client.calls == []
        assert "Saved" in capsys.readouterr().out

    def test_manual_mode(self, monkeypatch, capsys, cli_environment, fast_keys, aws_client, ocm_client):
        install_clients(
            monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client, ocm_client=ocm_client
        )

        assert run("create oidc-config", "--mode manual --prefix foo --region eu-west-1") == 0

        output = capsys.readouterr().out
        assert "aws s3api create-bucket" in output
        assert "LocationConstraint=eu-west-1" in output
        assert "aws s3api put-bucket-tagging" in output
        assert "aws secretsmanager create-secret" in output
        assert "'TagSet=[{Key=red-hat-managed,Value=true}]'" in output
        assert "PRIVATE KEY" not in output
        assert len(list(cli_environment.iterdir())) == 3
        assert aws_client.calls == []
        assert ocm_client.calls == []

    def test_manual_mode_checks_installer_role(self, monkeypatch, cli_environment, fast_keys, aws_client, ocm_client):
        built = install_clients(
            monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client, ocm_client=ocm_client
        )

        assert run("create oidc-config", f"--mode manual --installer-role-arn {ROLE_ARN} --region us-east-1") == 0

        assert built == [("aws", "us-east-1")]
        assert aws_client.calls == [("check_role_exists", "ManagedOpenShift-Installer-Role")]
        assert ocm_client.calls == []
        assert len(list(cli_environment.iterdir())) == 3


class TestCreateWithMissingAwsProfile:
    """A configured AWS CLI profile that does not exist"""

    @pytest.fixture(autouse=True)
    def missing_aws_profile(self, monkeypatch, tmp_path, isolated_config):
        monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws-config"))
        monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws-credentials"))
        monkeypatch.delenv("AWS_PROFILE", raising=False)

        config = Config()
        config.add_profile(Profile(name="p", aws_region="us-east-1", aws_profile="does-not-exist-xyz"))
        config.save()

    def test_manual_mode_needs_no_aws_session(self, cli_environment, fast_keys):
        assert run("create oidc-config", "--mode manual --profile p") == 0
        assert len(list(cli_environment.iterdir())) == 3

    def test_auto_mode_reports_session_error(self, monkeypatch, capsys, fast_keys, ocm_client):
        monkeypatch.setattr("rosa_oidc_config.cli.commands.create.create_ocm_client", lambda profile: ocm_client)

        assert run("create oidc-config", "--mode auto --profile p") == 1

        output = capsys.readouterr().out
        assert "Failed to create AWS session" in output
        assert "does-not-exist-xyz" in output
        assert ocm_client.calls == []


class TestCreateUnmanagedAuto:
    """Automatic unmanaged provisioning"""

    def test_end_to_end(self, monkeypatch, capsys, cli_environment, fast_keys, aws_client, ocm_client, secret_arn):
        install_clients(
            monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client, ocm_client=ocm_client
        )

        assert run("create oidc-config", "--mode auto --prefix foo --region us-east-1") == 0

        assert aws_client.operations == [
            "create_s3_bucket",
            "tag_s3_bucket",
            "put_public_read_object",
            "put_public_read_object",
            "create_secret",
        ]
        bucket_name = aws_client.calls[0][1]
        assert bucket_name.startswith("foo-oidc-")
        assert aws_client.calls[0][2] == "us-east-1"

        [registered] = ocm_client.created
        assert registered.managed is False
        assert registered.secret_arn == secret_arn
        assert registered.issuer_url == f"https://{bucket_name}.s3.us-east-1.amazonaws.com"

        output = capsys.readouterr().out
        assert "2abc3def4ghi" in output
        assert "rosa create oidc-provider --oidc-config-id 2abc3def4ghi" in output
        assert list(cli_environment.iterdir()) == []

    def test_yes_defaults_to_auto(self, monkeypatch, fast_keys, aws_client, ocm_client):
        install_clients(
            monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client, ocm_client=ocm_client
        )

        assert run("create oidc-config", "--yes --region us-east-1") == 0

        assert len(aws_client.calls) == 5
        assert len(ocm_client.created) == 1
        assert aws_client.calls[0][1].startswith("oidc-")

    def test_installer_role_is_checked_and_registered(self, monkeypatch, fast_keys, aws_client, ocm_client):
        install_clients(
            monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client, ocm_client=ocm_client
        )

        assert run("create oidc-config", f"--mode auto --installer-role-arn {ROLE_ARN} --region us-east-1") == 0

        assert aws_client.calls[0] == ("check_role_exists", "ManagedOpenShift-Installer-Role")
        assert ocm_client.created[0].installer_role_arn == ROLE_ARN

    def test_missing_installer_role(self, monkeypatch, capsys, fast_keys, aws_client, ocm_client):
        install_clients(
            monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client, ocm_client=ocm_client
        )
        missing_role = "arn:aws:iam::123456789012:role/Missing"

        assert run("create oidc-config", f"--mode auto --installer-role-arn {missing_role} --region us-east-1") == 1

        assert aws_client.calls == [("check_role_exists", "Missing")]
        assert ocm_client.calls == []
        assert f"Role '{missing_role}' does not exist" in capsys.readouterr().out

    def test_partial_failure_lists_created_resources(self, monkeypatch, capsys, fast_keys, failing_aws_client):
        aws_client = failing_aws_client("tag_s3_bucket")
        install_clients(monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client)

        assert run("create oidc-config", "--mode auto --prefix foo --region us-east-1") == 1

        bucket_name = aws_client.calls[0][1]
        output = capsys.readouterr().out
        assert f"There was a problem tagging S3 bucket '{bucket_name}'" in output
        assert f"Bucket: {bucket_name}" in output
        assert f"Issuer URL: https://{bucket_name}.s3.us-east-1.amazonaws.com" in output

    def test_registry_failure_lists_secret(
        self, monkeypatch, capsys, fast_keys, aws_client, failing_ocm_client, secret_arn
    ):
        install_clients(
            monkeypatch,
            "rosa_oidc_config.cli.commands.create",
            aws_client=aws_client,
            ocm_client=failing_ocm_client,
        )

        assert run("create oidc-config", "--mode auto --region us-east-1") == 1

        output = capsys.readouterr().out
        assert "try again through OCM CLI" in output
        assert f"Secret ARN: {secret_arn}" in output


class TestCreateManaged:
    """Managed configurations"""

    def test_managed_json(self, monkeypatch, capsys, cli_environment, aws_client, ocm_client, managed_issuer_url):
        built = install_clients(
            monkeypatch, "rosa_oidc_config.cli.commands.create", aws_client=aws_client, ocm_client=ocm_client
        )

        assert run("create oidc-config", "--managed --region us-east-1 --json") == 0

        result = json.loads(capsys.readouterr().out)
        assert result["strategy"] == "managed-auto"
        assert result["issuer_url"] == managed_issuer_url
        assert result["oidc_config_id"] == "2abc3def4ghi"
        assert result["secret_arn"] is None

        assert built == [("ocm", "default")]
        assert aws_client.calls == []
        assert ocm_client.created[0].to_request_body() == {"kind": "OidcConfig", "managed": True}
        assert list(cli_environment.iterdir()) == []

    def test_missing_ocm_token(self, monkeypatch, capsys):
        monkeypatch.setattr("rosa_oidc_config.config.keyring.get_password", lambda *args: None)

        assert run("create oidc-config", "--managed --region us-east-1") == 1
        assert "OCM token not found" in capsys.readouterr().out


@pytest.fixture
def registered_configs(ocm_client):
    ocm_client.create_oidc_config(
        OidcConfig(
            managed=False,
            issuer_url=UNMANAGED_ISSUER,
            secret_arn="arn:aws:secretsmanager:us-east-1:123456789012:secret:rosa-private-key-foo-oidc-ab12-AbCdEf",
        )
    )
    return ocm_client


class TestListDescribeDelete:
    """Commands that read or remove OCM records"""

    def test_list_json(self, monkeypatch, capsys, registered_configs):
        install_clients(monkeypatch, "rosa_oidc_config.cli.commands.list", ocm_client=registered_configs)

        assert run("list oidc-configs", "--json") == 0

        configs = json.loads(capsys.readouterr().out)
        assert [config["id"] for config in configs] == ["2abc3def4ghi"]
        assert configs[0]["issuer_url"] == UNMANAGED_ISSUER

    def test_list_empty(self, monkeypatch, capsys, ocm_client):
        install_clients(monkeypatch, "rosa_oidc_config.cli.commands.list", ocm_client=ocm_client)

        assert run("list oidc-configs") == 0
        assert "There are no OIDC configurations" in capsys.readouterr().out

    def test_describe(self, monkeypatch, capsys, registered_configs):
        install_clients(monkeypatch, "rosa_oidc_config.cli.commands.describe", ocm_client=registered_configs)

        assert run("describe oidc-config", "2abc3def4ghi") == 0
        assert UNMANAGED_ISSUER in capsys.readouterr().out

    def test_describe_missing(self, monkeypatch, capsys, ocm_client):
        install_clients(monkeypatch, "rosa_oidc_config.cli.commands.describe", ocm_client=ocm_client)

        assert run("describe oidc-config", "nope") == 1
        assert "not found" in capsys.readouterr().out

    def test_delete_prints_cleanup_commands(self, monkeypatch, capsys, registered_configs):
        install_clients(monkeypatch, "rosa_oidc_config.cli.commands.delete", ocm_client=registered_configs)

        assert run("delete oidc-config", "2abc3def4ghi --yes") == 0

        output = capsys.readouterr().out
        assert registered_configs.deleted == ["2abc3def4ghi"]
        assert "aws s3 rb s3://foo-oidc-ab12 --force" in output
        assert "aws secretsmanager delete-secret --secret-id arn:aws:secretsmanager" in output

    def test_delete_cancelled(self, monkeypatch, registered_configs):
        install_clients(monkeypatch, "rosa_oidc_config.cli.commands.delete", ocm_client=registered_configs)
        monkeypatch.setattr("rosa_oidc_config.cli.commands.delete.Confirm.ask", lambda *args, **kwargs: False)

        assert run("delete oidc-config", "2abc3def4ghi") == 0
        assert registered_configs.deleted == []


class _Answer:
    def __init__(self, value):
        self.value = value

    def ask(self):
        return self.value


class TestInit:
    """Interactive profile setup"""

    def test_creates_profile(self, monkeypatch, isolated_config):
        text_answers = iter(["eu-west-1", "rosa", "https://api.stage.openshift.com/"])
        monkeypatch.setattr("questionary.text", lambda *args, **kwargs: _Answer(next(text_answers)))
        monkeypatch.setattr("questionary.select", lambda *args, **kwargs: _Answer("env"))

        assert run("init", "--profile stage") == 0

        profile = Config.load().get_profile("stage")
        assert profile.aws_region == "eu-west-1"
        assert profile.aws_profile == "rosa"
        assert profile.ocm_url == "https://api.stage.openshift.com"
        assert profile.credential_storage == "env"

    def test_cancelled(self, monkeypatch, isolated_config):
        monkeypatch.setattr("questionary.text", lambda *args, **kwargs: _Answer(None))

        assert run("init") == 1
        assert not (isolated_config / "config.json").exists()
