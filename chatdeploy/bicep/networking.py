"""Private networking settings shared by the network-facing modules."""
from typing import Optional

from .models import PrivateEndpointSettings
from ..manifest.schema import Manifest

SPOKE_RESOURCE_GROUP = "spokeResourceGroup"
SPOKE_PRIMARY_SUBNET = "spokePrimarySubnet"
SPOKE_WEB_INBOUND_SUBNET = "spokeWebInboundSubnet"
SPOKE_WEB_OUTBOUND_SUBNET = "spokeWebOutboundSubnet"

def private_endpoint_settings(
    manifest: Manifest, endpoint_key: str, subnet_key: str = SPOKE_PRIMARY_SUBNET
) -> Optional[PrivateEndpointSettings]:
    """Build the private endpoint block for one resource.
    
    Args:
        manifest: Deployment manifest.
        endpoint_key: resourceNames key holding the private endpoint name.
        subnet_key: resourceNames key holding the name of the subnet to use.
        
    Returns:
        Optional[PrivateEndpointSettings]: None unless the deployment is network isolated.
        
    Raises:
        MissingKeyError: If a referenced name or subnet is absent.
    """
    if not manifest.deployment_settings.is_network_isolated:
        return None
    return PrivateEndpointSettings(
        dns_resource_group_name=manifest.dns_resource_group_name,
        name=manifest.lookup_name(endpoint_key),
        resource_group_name=manifest.lookup_name(SPOKE_RESOURCE_GROUP),
        subnet_id=manifest.lookup_subnet(subnet_key)
    )

def public_network_access(manifest: Manifest) -> str:
    return "Disabled" if manifest.deployment_settings.is_network_isolated else "Enabled"

def outbound_subnet_id(manifest: Manifest) -> str:
    """Subnet for app service VNet integration, empty when not isolated."""
    if not manifest.deployment_settings.is_network_isolated:
        return ""
    return manifest.lookup_subnet(SPOKE_WEB_OUTBOUND_SUBNET)
