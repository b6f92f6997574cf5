"""
Engine primitives that the documentation page does not describe.

The event manager object and the manager accessors exist in every game
client, so they are injected before the page is read. Entries parsed from the
page with the same names replace them.
"""

from esodoc.schemas import ApiFunction, ApiObject, Documentation

MANAGER_ACCESSORS = {
    "GetWindowManager": ("windowManager", "WindowManager"),
    "GetAnimationManager": ("animationManager", "AnimationManager"),
    "GetEventManager": ("eventManager", "EventManager"),
    "GetAddOnManager": ("addOnManager", "AddOnManager"),
}


def _event_manager() -> ApiObject:
    register_for_event = ApiFunction(name="RegisterForEvent")
    register_for_event.add_argument("namespace", "string")
    register_for_event.add_argument("event", "integer")
    register_for_event.add_argument("callback", "function")
    register_for_event.add_return("success", "bool")

    unregister_for_event = ApiFunction(name="UnregisterForEvent")
    unregister_for_event.add_argument("namespace", "string")
    unregister_for_event.add_argument("event", "integer")
    unregister_for_event.add_return("success", "bool")

    add_filter_for_event = ApiFunction(name="AddFilterForEvent")
    add_filter_for_event.add_argument("namespace", "string")
    add_filter_for_event.add_argument("event", "integer")
    add_filter_for_event.add_argument("filterType", "RegisterForEventFilterType")
    add_filter_for_event.add_argument("filterValue")
    add_filter_for_event.add_argument("...")
    add_filter_for_event.add_return("success", "bool")

    register_for_update = ApiFunction(name="RegisterForUpdate")
    register_for_update.add_argument("namespace", "string")
    register_for_update.add_argument("interval", "integer")
    register_for_update.add_argument("callback", "function")
    register_for_update.add_return("success", "bool")

    unregister_for_update = ApiFunction(name="UnregisterForUpdate")
    unregister_for_update.add_argument("namespace", "string")
    unregister_for_update.add_return("success", "bool")

    event_manager = ApiObject(name="EventManager")
    for function in (
        register_for_event,
        unregister_for_event,
        add_filter_for_event,
        register_for_update,
        unregister_for_update,
    ):
        event_manager.add_function(function)
    return event_manager


def inject_builtins(documentation: Documentation) -> None:
    """Register the built-in API surface in ``documentation``."""
    event_manager = _event_manager()
    documentation.objects[event_manager.name] = event_manager

    for name, (return_name, return_type) in MANAGER_ACCESSORS.items():
        accessor = ApiFunction(name=name)
        accessor.add_return(return_name, return_type)
        documentation.functions[name] = accessor
