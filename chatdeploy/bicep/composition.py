"""Module composition: build every module call and order them by data dependency."""
from dataclasses import dataclass
from graphlib import CycleError, TopologicalSorter
from typing import Any, Dict, Iterator, List, Set

from .builders.app_service import AppServiceBuilder
from .builders.app_service_plan import AppServicePlanBuilder
from .builders.cognitive_services import CognitiveServicesBuilder
from .builders.search_diagnostics import SearchDiagnosticsBuilder
from .builders.search_service import SearchServiceBuilder
from .models import BicepModule, ModuleOutput, RoleAssignment
from .resolver import ResolvedValues, resolve_values
from .roles import build_role_assignments
from ..errors import CompositionError
from ..manifest.schema import Manifest

@dataclass
class Composition:
    """Everything main.bicep declares, in emission order."""
    modules: List[BicepModule]
    role_assignments: List[RoleAssignment]
    resolved: ResolvedValues

    def module(self, symbol: str) -> BicepModule:
        for module in self.modules:
            if module.symbol == symbol:
                return module
        raise KeyError(symbol)

    @property
    def order(self) -> List[str]:
        return [module.symbol for module in self.modules]

def _module_outputs(value: Any) -> Iterator[ModuleOutput]:
    """Yield every ModuleOutput reachable from a parameter value."""
    if isinstance(value, ModuleOutput):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from _module_outputs(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _module_outputs(item)

def order_modules(modules: List[BicepModule]) -> List[BicepModule]:
    """Topologically order modules so producers precede their consumers.
    
    Fills in each module's ``depends_on`` from the outputs it references.
    Modules with no dependency between them keep their input order.
    
    Raises:
        CompositionError: If a module references an unknown module or the
            references form a cycle.
    """
    by_symbol = {module.symbol: module for module in modules}
    if len(by_symbol) != len(modules):
        raise CompositionError("Module symbols must be unique")
    
    sorter = TopologicalSorter()
    for module in modules:
        producers: Set[str] = {ref.module for ref in _module_outputs(module.parameters)}
        unknown = producers - by_symbol.keys()
        if unknown:
            raise CompositionError(
                f"Module '{module.symbol}' references unknown module(s): {', '.join(sorted(unknown))}"
            )
        module.depends_on = [m.symbol for m in modules if m.symbol in producers]
        sorter.add(module.symbol, *module.depends_on)
    
    try:
        sorter.prepare()
    except CycleError as e:
        raise CompositionError(f"Module dependencies form a cycle: {e.args[1]}") from e
    
    position = {module.symbol: index for index, module in enumerate(modules)}
    ordered: List[BicepModule] = []
    while sorter.is_active():
        ready = sorted(sorter.get_ready(), key=position.__getitem__)
        for symbol in ready:
            ordered.append(by_symbol[symbol])
            sorter.done(symbol)
    return ordered

def compose(manifest: Manifest, subscription_id: str, debug: bool = False) -> Composition:
    """Build and order all module calls and role assignments.
    
    Args:
        manifest: Deployment manifest.
        subscription_id: Subscription the resource group lives in.
        debug: If True, print verbose debug information.
        
    Returns:
        Composition: Ordered modules, role assignments and resolved values.
        
    Raises:
        MissingKeyError: If a resource name or subnet lookup fails.
        CompositionError: If the module graph cannot be ordered.
    """
    resolved = resolve_values(manifest)
    if debug:
        print(f"Debug: Semantic ranker level: {resolved.semantic_ranker_level.value}")
        print(f"Debug: Chat model version: {resolved.chat_gpt.deployment_version}")
        print(f"Debug: Embedding model version: {resolved.embedding.deployment_version}")
    
    plan_created = not manifest.use_common_app_service_plan
    modules = [CognitiveServicesBuilder().build(manifest, resolved)]
    if plan_created:
        modules.append(AppServicePlanBuilder().build(manifest))
    elif debug:
        print("Debug: Using common app service plan, skipping plan module")
    modules.extend([
        SearchServiceBuilder().build(manifest, resolved),
        SearchDiagnosticsBuilder().build(manifest),
        AppServiceBuilder().build(manifest, resolved, plan_created=plan_created),
    ])
    ordered = order_modules(modules)
    
    resource_group_id = f"/subscriptions/{subscription_id}/resourceGroups/{manifest.resource_group.name}"
    role_assignments = build_role_assignments(
        subscription_id, resource_group_id, manifest.deployment_settings
    )
    
    if debug:
        print(f"Debug: Module order: {' -> '.join(m.symbol for m in ordered)}")
        print(f"Debug: {len(role_assignments)} role assignments")
    
    return Composition(ordered, role_assignments, resolved)
