"""Search role assignments for the managed identity and the deploying principal."""
import uuid
from enum import Enum
from typing import List

from .models import BicepExpression, RoleAssignment
from ..manifest.schema import DeploymentSettings, PrincipalType

# Namespace used by the ARM template guid() function.
ARM_GUID_NAMESPACE = uuid.UUID("11fb06fb-712d-4ddd-98c7-e71bbd588830")

MANAGED_IDENTITY_PRINCIPAL_ID = BicepExpression("managedIdentity.properties.principalId")

class RoleDefinition(str, Enum):
    """Built-in Azure role definition ids."""
    SEARCH_INDEX_DATA_READER = "1407120a-92aa-4202-b7e9-c0e197c71c8f"
    SEARCH_INDEX_DATA_CONTRIBUTOR = "8ebe5a00-799e-43f5-93ac-243d3dce84a7"
    SEARCH_SERVICE_CONTRIBUTOR = "7ca78c08-252a-4471-8644-bb5ff32d4ba0"

def deterministic_guid(*parts: str) -> str:
    """Same result as ARM guid(parts...): stable across runs for equal inputs."""
    return str(uuid.uuid5(ARM_GUID_NAMESPACE, "-".join(parts)))

def role_definition_resource_id(subscription_id: str, role: RoleDefinition) -> str:
    return f"/subscriptions/{subscription_id}/providers/Microsoft.Authorization/roleDefinitions/{role.value}"

def build_role_assignments(
    subscription_id: str, resource_group_id: str, deployment_settings: DeploymentSettings
) -> List[RoleAssignment]:
    """Build the four search role assignments.
    
    The managed identity can read index data and manage the search service.
    The deploying principal can read and write index data. Managed identity
    assignments are keyed by a purpose string because the identity's principal
    id is only known to the deployment engine.
    
    Args:
        subscription_id: Subscription GUID.
        resource_group_id: Fully-qualified resource group id.
        deployment_settings: Supplies the human principal id and type.
        
    Returns:
        List[RoleAssignment]: Assignments with deterministic names.
    """
    subscription_scope = f"/subscriptions/{subscription_id}"
    principal_id = deployment_settings.principal_id
    principal_type = deployment_settings.principal_type.value
    
    grants = [
        ("managedIdentitySearchIndexDataReader", MANAGED_IDENTITY_PRINCIPAL_ID,
         PrincipalType.SERVICE_PRINCIPAL.value, RoleDefinition.SEARCH_INDEX_DATA_READER,
         "managedIdentitySearchIndexDataReader"),
        ("managedIdentitySearchServiceContributor", MANAGED_IDENTITY_PRINCIPAL_ID,
         PrincipalType.SERVICE_PRINCIPAL.value, RoleDefinition.SEARCH_SERVICE_CONTRIBUTOR,
         "managedIdentitySearchServiceContributor"),
        ("principalSearchIndexDataReader", principal_id,
         principal_type, RoleDefinition.SEARCH_INDEX_DATA_READER,
         principal_id),
        ("principalSearchIndexDataContributor", principal_id,
         principal_type, RoleDefinition.SEARCH_INDEX_DATA_CONTRIBUTOR,
         principal_id),
    ]
    
    return [
        RoleAssignment(
            symbol=symbol,
            name=deterministic_guid(subscription_scope, resource_group_id, discriminator, role.value),
            principal_id=assignee,
            principal_type=assignee_type,
            role_definition_id=role_definition_resource_id(subscription_id, role)
        )
        for symbol, assignee, assignee_type, role, discriminator in grants
    ]
