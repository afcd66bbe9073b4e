"""Unit tests for the list command."""

from unittest.mock import patch

from fakes import FakeProvider, make_record
from typer.testing import CliRunner

from psmodctl.cli.main import app
from psmodctl.core.inventory import InventoryResolver
from psmodctl.models.package import Scope

runner = CliRunner()


class TestListCommand:
    """Tests for psmodctl list command."""

    def test_lists_modules(self, resolver: InventoryResolver, psresourceget: FakeProvider) -> None:
        """Installed modules are shown in a table."""
        psresourceget.installed = [make_record("Pester", "5.6.1"), make_record("Az", "11.0.0")]

        with patch("psmodctl.cli.commands.inventory.get_resolver", return_value=resolver):
            result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Pester" in result.stdout
        assert "5.6.1" in result.stdout
        assert "2 module(s)" in result.stdout

    def test_scope_filter(self, resolver: InventoryResolver, psresourceget: FakeProvider) -> None:
        """--scope keeps only matching modules."""
        psresourceget.installed = [
            make_record("Pester", "5.6.1", scope=Scope.USER),
            make_record("Az", "11.0.0", scope=Scope.SYSTEM),
        ]

        with patch("psmodctl.cli.commands.inventory.get_resolver", return_value=resolver):
            result = runner.invoke(app, ["list", "--scope", "system"])

        assert result.exit_code == 0
        assert "Az" in result.stdout
        assert "Pester" not in result.stdout

    def test_json(self, resolver: InventoryResolver, psresourceget: FakeProvider) -> None:
        """--format json prints records as JSON."""
        psresourceget.installed = [make_record("Pester", "5.6.1")]

        with patch("psmodctl.cli.commands.inventory.get_resolver", return_value=resolver):
            result = runner.invoke(app, ["list", "--format", "json"])

        assert result.exit_code == 0
        assert '"name": "Pester"' in result.stdout
        assert '"provider": "psresourceget"' in result.stdout

    def test_unavailable_provider(
        self, resolver: InventoryResolver, powershellget: FakeProvider
    ) -> None:
        """An unavailable provider warns and lists nothing."""
        powershellget._available = False

        with patch("psmodctl.cli.commands.inventory.get_resolver", return_value=resolver):
            result = runner.invoke(app, ["list", "--provider", "powershellget"])

        assert result.exit_code == 0
        assert "PowerShellGet is not available" in result.output
        assert result.output.count("not available") == 1
        assert "No installed modules found" in result.stdout
