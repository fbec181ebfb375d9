"""Shared data models for Bicep generation."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

@dataclass(frozen=True)
class BicepExpression:
    """A raw Bicep expression, emitted without quoting."""
    text: str

@dataclass(frozen=True)
class ModuleOutput:
    """Reference to an output of another module in the same template."""
    module: str
    output: str

    @property
    def text(self) -> str:
        return f"{self.module}.outputs.{self.output}"

@dataclass
class BicepModule:
    """Bicep module definition."""
    symbol: str
    source: str
    parameters: Dict[str, Any]
    depends_on: List[str] = field(default_factory=list)

    @property
    def deployment_name(self) -> str:
        return self.symbol

@dataclass(frozen=True)
class ModelSpec:
    """An OpenAI model to deploy, with its deployment name and capacity."""
    model_name: str
    deployment_name: str
    deployment_version: str
    capacity: int
    dimensions: Optional[int] = None

@dataclass(frozen=True)
class OpenAiDeployment:
    """Deployment descriptor passed to the cognitive services module."""
    name: str
    model_name: str
    model_version: str
    sku_capacity: int
    model_format: str = "OpenAI"
    sku_name: str = "Standard"

    def to_bicep(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "model": {
                "format": self.model_format,
                "name": self.model_name,
                "version": self.model_version
            },
            "sku": {
                "name": self.sku_name,
                "capacity": self.sku_capacity
            }
        }

@dataclass(frozen=True)
class PrivateEndpointSettings:
    """Private endpoint placement for a network-isolated resource."""
    dns_resource_group_name: str
    name: str
    resource_group_name: str
    subnet_id: str

    def to_bicep(self) -> Dict[str, str]:
        return {
            "dnsResourceGroupName": self.dns_resource_group_name,
            "name": self.name,
            "resourceGroupName": self.resource_group_name,
            "subnetId": self.subnet_id
        }

@dataclass(frozen=True)
class RoleAssignment:
    """A role binding for one principal, scoped to the resource group."""
    symbol: str
    name: str
    principal_id: Any
    principal_type: str
    role_definition_id: str
