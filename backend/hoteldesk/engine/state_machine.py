"""
hoteldesk/engine/state_machine.py

状态机引擎 - 声明式状态与转换定义
记录本身保存在数据库里，状态机只负责判断一次转换是否合法
"""
from typing import Dict, List, Optional
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


def _state_key(state) -> str:
    """枚举与字符串统一按值比较"""
    return getattr(state, "value", state)


@dataclass(frozen=True)
class StateTransition:
    """
    状态转换定义

    Attributes:
        from_state: 源状态
        to_state: 目标状态
        trigger: 触发动作
    """

    from_state: str
    to_state: str
    trigger: str


@dataclass
class StateMachineConfig:
    """
    状态机配置

    Attributes:
        name: 状态机名称
        states: 所有状态
        transitions: 转换列表
        initial_state: 初始状态
    """

    name: str
    states: List[str]
    transitions: List[StateTransition]
    initial_state: str


class StateMachine:
    """
    状态机

    Example:
        >>> machine = StateMachine(config, current_state="reserved")
        >>> if machine.can_transition_to("checked-in", "check_in"):
        ...     machine.transition_to("checked-in", "check_in")
    """

    def __init__(self, config: StateMachineConfig, current_state: Optional[str] = None):
        self._config = config
        self._states = {_state_key(s) for s in config.states}
        self._current_state = _state_key(current_state if current_state is not None else config.initial_state)
        if self._current_state not in self._states:
            raise ValueError(f"Unknown state '{self._current_state}' for {config.name}")

        # (from_state, trigger) -> transition
        self._transition_map: Dict[str, Dict[str, StateTransition]] = {}
        for t in config.transitions:
            self._transition_map.setdefault(_state_key(t.from_state), {})[_state_key(t.trigger)] = t

    @property
    def current_state(self) -> str:
        return self._current_state

    def get_transition(self, trigger) -> Optional[StateTransition]:
        """当前状态下触发动作对应的转换，不存在返回 None"""
        return self._transition_map.get(self._current_state, {}).get(_state_key(trigger))

    def can_transition_to(self, target_state, trigger) -> bool:
        """检查是否可以通过 trigger 转换到目标状态"""
        if _state_key(target_state) not in self._states:
            return False
        transition = self.get_transition(trigger)
        return transition is not None and _state_key(transition.to_state) == _state_key(target_state)

    def transition_to(self, target_state, trigger) -> bool:
        """执行状态转换，非法转换返回 False"""
        if not self.can_transition_to(target_state, trigger):
            logger.warning(
                f"Invalid {self._config.name} transition: {self._current_state} -> "
                f"{_state_key(target_state)} (trigger: {_state_key(trigger)})"
            )
            return False

        previous_state = self._current_state
        self._current_state = _state_key(target_state)
        logger.debug(f"{self._config.name} transition: {previous_state} -> {self._current_state}")
        return True


__all__ = [
    "StateTransition",
    "StateMachineConfig",
    "StateMachine",
]
