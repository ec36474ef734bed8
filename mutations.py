"""
State mutations contributed by arena features (conveyors, signs)
"""
from grid import Arena, FeatureKind


class StateMutationsProvider:
    """No arena effects: every hook hands the state back unchanged."""

    def before_move(self, state):
        return state

    def after_move(self, state):
        return state


class ArenaMutationsProvider(StateMutationsProvider):
    def __init__(self, arena: Arena):
        self.arena = arena

    def before_move(self, state):
        feature = self._feature_under(state)
        if feature is None:
            return state

        if feature.kind == FeatureKind.SIGN and state.display_text != feature.text:
            return state.display(feature.text, source="Sign")
        return state

    def after_move(self, state):
        feature = self._feature_under(state)
        if feature is None:
            return state

        if feature.kind == FeatureKind.CONVEYOR:
            return state.move(feature.movement, self.arena, source="Conveyor")
        return state

    def _feature_under(self, state):
        if state.is_destroyed:
            return None
        return self.arena.feature_at(state.position)
