"""chatdeploy CLI entrypoint."""
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from chatdeploy.bicep.generator import BicepGenerator
from chatdeploy.bicep.serializer import to_bicep
from chatdeploy.manifest.parser import ManifestParser
from chatdeploy.manifest.schema import Manifest
from chatdeploy.manifest.updater import ManifestUpdater

app = typer.Typer(help="chatdeploy - Bicep composer for the OpenAI + AI Search chat application")
console = Console()

def _fail(message: str) -> None:
    console.print(f"[bold red]Error: {escape(message)}[/]")
    raise typer.Exit(code=1)

@app.command("generate")
def generate(
    config: str = typer.Option("infra.yaml", "--config", "-c", help="Path to the deployment YAML manifest"),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Directory for generated Bicep files"),
    debug: bool = typer.Option(False, "--debug", help="Print verbose debug information including generated Bicep"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing Bicep files")
):
    """Generate main.bicep and main.parameters.json from the manifest."""
    console.print("[bold blue]Generating Bicep files...[/]")

    output_path = Path(output_dir) if output_dir else Path(config).parent
    existing_files = [
        path for path in (output_path / "main.bicep", output_path / "main.parameters.json")
        if path.exists()
    ]
    if existing_files and not force:
        existing_files_str = ", ".join(str(f) for f in existing_files)
        console.print(f"[bold yellow]WARNING: Bicep files already exist: {existing_files_str}[/]")
        console.print("[yellow]Use --force to overwrite existing files.[/]")
        raise typer.Exit(code=1)

    try:
        generator = BicepGenerator(config, str(output_path), debug=debug)
        bicep_path, params_path = generator.generate()
    except Exception as e:
        _fail(str(e))

    console.print(f"[green]Bicep template generated at {bicep_path}[/]")
    console.print(f"[green]Parameters file generated at {params_path}[/]")

    if debug:
        console.print("\n[bold blue]Generated Bicep Template:[/]")
        console.print(Path(bicep_path).read_text(), markup=False)

@app.command("plan")
def plan(
    config: str = typer.Option("infra.yaml", "--config", "-c", help="Path to the deployment YAML manifest"),
    debug: bool = typer.Option(False, "--debug", help="Print verbose debug information")
):
    """Show resolved values, module order and role assignments without writing files."""
    try:
        generator = BicepGenerator(config, debug=debug)
        composition = generator.compose()
    except Exception as e:
        _fail(str(e))

    resolved = composition.resolved
    values_table = Table(title="Resolved Values")
    values_table.add_column("Setting", style="cyan")
    values_table.add_column("Value")
    values_table.add_row("Semantic ranker", resolved.semantic_ranker_level.value)
    values_table.add_row("Chat model", f"{resolved.chat_gpt.model_name} {resolved.chat_gpt.deployment_version}")
    values_table.add_row("Embedding model", f"{resolved.embedding.model_name} {resolved.embedding.deployment_version}")
    values_table.add_row(
        "Network isolated",
        str(generator.manifest.deployment_settings.is_network_isolated).lower()
    )
    console.print(values_table)

    modules_table = Table(title="Modules (deployment order)")
    modules_table.add_column("#", justify="right")
    modules_table.add_column("Module", style="cyan")
    modules_table.add_column("Source")
    modules_table.add_column("Depends on")
    modules_table.add_column("Private endpoint")
    for index, module in enumerate(composition.modules, start=1):
        endpoint = module.parameters.get("privateEndpointSettings")
        modules_table.add_row(
            str(index),
            module.symbol,
            module.source,
            ", ".join(module.depends_on),
            endpoint.name if endpoint else "-"
        )
    console.print(modules_table)

    roles_table = Table(title="Role Assignments")
    roles_table.add_column("Name", style="cyan")
    roles_table.add_column("Principal")
    roles_table.add_column("Type")
    roles_table.add_column("Role")
    for assignment in composition.role_assignments:
        roles_table.add_row(
            assignment.name,
            to_bicep(assignment.principal_id),
            assignment.principal_type,
            assignment.role_definition_id.rsplit("/", 1)[-1]
        )
    console.print(roles_table)

@app.command("deploy")
def deploy(
    config: str = typer.Option("infra.yaml", "--config", "-c", help="Path to the deployment YAML manifest"),
    what_if: bool = typer.Option(False, "--what-if", help="Show what would be deployed without making changes"),
    force: bool = typer.Option(False, "--force", "-f", help="Force regeneration of Bicep files even if they exist"),
    debug: bool = typer.Option(False, "--debug", help="Print verbose debug information including all Azure CLI commands")
):
    """Deploy the generated template into the manifest's resource group."""
    console.print("[bold blue]Deploying resources...[/]")

    try:
        manifest = ManifestParser.load(config)
        output_dir = Path(config).parent
        bicep_path = output_dir / "main.bicep"
        params_path = output_dir / "main.parameters.json"

        if force or not bicep_path.exists() or not params_path.exists():
            if force:
                console.print("[yellow]Force flag specified. Regenerating Bicep files...[/]")
            else:
                console.print("[yellow]Bicep files not found. Generating...[/]")
            generator = BicepGenerator(config, str(output_dir), debug=debug)
            generated_bicep, generated_params = generator.generate()
            bicep_path, params_path = Path(generated_bicep), Path(generated_params)

        deployment_name = f"{manifest.metadata.name}-{manifest.metadata.version}"
        if what_if:
            deployment_name += f"-whatif-{datetime.now().strftime('%Y%m%d%H%M%S')}"

        cmd = [
            "az", "deployment", "group",
            "what-if" if what_if else "create",
            "--resource-group", manifest.resource_group.name,
            "--name", deployment_name,
            "--template-file", str(bicep_path),
            "--parameters", f"@{params_path}"
        ]
        if manifest.subscription:
            cmd.extend(["--subscription", manifest.subscription])

        cmd_display = " ".join(cmd)
        console.print(f"Running: [bold]{cmd_display}[/]")
        subprocess.run(cmd, check=True, stderr=subprocess.PIPE, text=True)
    except subprocess.CalledProcessError as e:
        console.print(f"[bold red]Deployment failed: {escape(str(e))}[/]")
        if e.stderr:
            console.print(e.stderr.strip(), markup=False)
        elif debug:
            console.print("[blue]Debug: No error output captured[/]")
        raise typer.Exit(code=1)
    except Exception as e:
        _fail(str(e))

    if what_if:
        console.print("\n[green]What-if analysis completed. No resources were modified.[/]")
    else:
        console.print("\n[green]Deployment completed successfully![/]")

@app.command("set")
def set_field(
    field: str = typer.Argument(..., help="Dot-separated manifest field, e.g. chatGptDeploymentVersion"),
    value: str = typer.Argument(..., help="New value"),
    config: str = typer.Option("infra.yaml", "--config", "-c", help="Path to the deployment YAML manifest")
):
    """Update an existing manifest field in place."""
    try:
        written = ManifestUpdater.update_field_from_string(
            config, field, value, validate=Manifest.model_validate
        )
    except Exception as e:
        _fail(str(e))
    console.print(f"[green]Set {field} = {written!r}[/]")

if __name__ == "__main__":
    app()
