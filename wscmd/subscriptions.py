from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List

@dataclass
class SubscriptionTable:
    # event name -> whether the remote peer wants it pushed
    events: Dict[str, bool] = field(default_factory=dict)

    def subscribe(self, event_name: str) -> bool:
        """Mark subscribed; True only if it was not subscribed before."""
        if self.events.get(event_name, False):
            return False
        self.events[event_name] = True
        return True

    def unsubscribe(self, event_name: str) -> bool:
        """Mark unsubscribed; True only if it was subscribed before."""
        if not self.events.get(event_name, False):
            return False
        self.events[event_name] = False
        return True

    def is_subscribed(self, event_name: str) -> bool:
        return self.events.get(event_name, False)

    def subscribed(self) -> List[str]:
        return sorted(name for name, on in self.events.items() if on)
