#!/usr/bin/env python3
"""Interactive console for the clinic patients API."""

import sys

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table


class PatientsCLI:
    """Interactive interface over the clinic HTTP API."""

    def __init__(self, base_url: str = "http://localhost:8000"):
        """Initialize patients CLI."""
        self.base_url = base_url.rstrip("/")
        self.console = Console()
        self.client = httpx.Client(base_url=self.base_url, timeout=30.0)

    def start(self) -> None:
        """Start the interactive session."""
        self.console.print(
            Panel.fit(
                "[bold blue]Clinic Management - Patients Console[/bold blue]\n"
                "Type [cyan]help[/cyan] for the list of commands.",
                border_style="blue",
            )
        )

        if not self._test_connection():
            self.console.print(f"[red]Cannot connect to the service at {self.base_url}.[/red]")
            return

        self.console.print("[green]Connected to clinic API[/green]\n")

        commands = {
            "list": self.list_patients,
            "get": self.get_patient,
            "add": self.add_patient,
            "edit": self.edit_patient,
            "rm": self.delete_patient,
            "gifts": self.list_gifts,
            "help": self._show_help,
        }

        try:
            while True:
                user_input = Prompt.ask("\n[bold cyan]clinic[/bold cyan]").strip()
                if not user_input:
                    continue

                command, *args = user_input.split()
                if command in ["quit", "exit"]:
                    break

                handler = commands.get(command)
                if handler is None:
                    self.console.print(f"[yellow]Unknown command: {command}[/yellow]")
                    continue

                try:
                    handler(*args)
                except TypeError:
                    self.console.print(f"[yellow]Wrong arguments for {command}, see help[/yellow]")
                except httpx.HTTPError as e:
                    self.console.print(f"[red]Connection error: {e}[/red]")

        except KeyboardInterrupt:
            pass
        finally:
            self.console.print("\n[yellow]Goodbye![/yellow]")
            self.client.close()

    def list_patients(self) -> None:
        response = self.client.get("/api/patients")
        if self._report_error(response):
            return
        self._show_patients(response.json())

    def get_patient(self, ci: str) -> None:
        response = self.client.get(f"/api/patients/{ci}")
        if self._report_error(response):
            return
        self._show_patients([response.json()])

    def add_patient(self) -> None:
        payload = {
            "name": Prompt.ask("Name"),
            "lastName": Prompt.ask("Last name"),
            "ci": Prompt.ask("CI"),
        }
        response = self.client.post("/api/patients", json=payload)
        if self._report_error(response):
            return
        self.console.print(f"[green]Created at {response.headers.get('location')}[/green]")
        self._show_patients([response.json()])

    def edit_patient(self, ci: str) -> None:
        payload = {"name": Prompt.ask("Name"), "lastName": Prompt.ask("Last name")}
        response = self.client.put(f"/api/patients/{ci}", json=payload)
        if self._report_error(response):
            return
        self._show_patients([response.json()])

    def delete_patient(self, ci: str) -> None:
        response = self.client.delete(f"/api/patients/{ci}")
        if self._report_error(response):
            return
        self.console.print(f"[green]Patient {ci} deleted[/green]")

    def list_gifts(self) -> None:
        response = self.client.get("/api/gifts")
        if self._report_error(response):
            return

        table = Table(title="Gifts")
        table.add_column("Id")
        table.add_column("Name")
        table.add_column("Description")
        table.add_column("Data")
        for gift in response.json():
            data = ", ".join(f"{key}={value}" for key, value in gift.get("data", {}).items())
            table.add_row(gift["id"], gift["name"], gift.get("description") or "", data)
        self.console.print(table)

    def _test_connection(self) -> bool:
        """Test connection to the service."""
        try:
            response = self.client.get("/health")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    def _report_error(self, response: httpx.Response) -> bool:
        """Print the API error message, if any. Returns True on error."""
        if response.is_success:
            return False

        try:
            message = response.json().get("message", response.text)
        except ValueError:
            message = response.text
        self.console.print(f"[red]API Error {response.status_code}: {message}[/red]")
        return True

    def _show_patients(self, patients: list[dict]) -> None:
        table = Table(title="Patients")
        table.add_column("CI", style="cyan")
        table.add_column("Name")
        table.add_column("Last name")
        table.add_column("Blood group", style="magenta")
        for patient in patients:
            table.add_row(patient["ci"], patient["name"], patient["lastName"], patient["bloodGroup"])
        self.console.print(table)

    def _show_help(self) -> None:
        """Show help information."""
        help_text = """
[bold]Available Commands:[/bold]
• list - List all patients
• get <ci> - Show one patient
• add - Register a new patient
• edit <ci> - Change a patient's name and last name
• rm <ci> - Delete a patient
• gifts - List gifts from the external service
• quit or exit - Leave the console
        """

        self.console.print(Panel(help_text.strip(), title="[cyan]Help[/cyan]", border_style="cyan"))


def main():
    """Main entry point for the patients CLI."""
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"

    cli = PatientsCLI(base_url)
    cli.start()


if __name__ == "__main__":
    main()
