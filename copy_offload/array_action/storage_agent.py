from contextlib import contextmanager
from threading import RLock

from copy_offload.array_action.array_mediator_infinibox import InfiniBoxArrayMediator
from copy_offload.array_action.array_mediator_par3 import Par3ArrayMediator
from copy_offload.array_action.array_mediator_powerflex import PowerFlexArrayMediator
from copy_offload.array_action.errors import FailedToFindStorageSystemType
from copy_offload.common.copy_offload_logger import get_stdout_logger

logger = get_stdout_logger()
_array_agents = {}
lock = RLock()

array_type_to_mediator = {
    Par3ArrayMediator.array_type: Par3ArrayMediator,
    PowerFlexArrayMediator.array_type: PowerFlexArrayMediator,
    InfiniBoxArrayMediator.array_type: InfiniBoxArrayMediator,
}


def get_mediator_class(array_type):
    mediator_class = array_type_to_mediator.get(array_type)
    if mediator_class is None:
        raise FailedToFindStorageSystemType(array_type)
    return mediator_class


def get_agent(array_connection_info):
    agent_key = (array_connection_info.array_type, array_connection_info.user, array_connection_info.endpoint)
    with lock:
        found = _array_agents.get(agent_key, None)
        if found:
            # replace the agent and its connection if password is changed.
            if found.password != array_connection_info.password:
                logger.debug(
                    "The password is changed for endpoint {}, "
                    "remove the cached connection".format(array_connection_info.endpoint)
                )
                del _array_agents[agent_key]
                found.disconnect()
            else:
                logger.debug("Found a cached agent for endpoint {}, reuse it".format(array_connection_info.endpoint))
                return found

        logger.debug("Creating a new agent for endpoint {}".format(array_connection_info.endpoint))
        agent = StorageAgent(array_connection_info)
        _array_agents[agent_key] = agent
        return agent


def get_agents():
    return _array_agents


def clear_agents():
    with lock:
        agents = list(_array_agents.values())
        _array_agents.clear()
        for agent in agents:
            agent.disconnect()


class StorageAgent:
    """
    StorageAgent holds the mediator of a storage system for reuse across threads.
    """

    def __init__(self, array_connection_info):
        self.array_type = array_connection_info.array_type
        self.username = array_connection_info.user
        self.password = array_connection_info.password
        self.endpoint = array_connection_info.endpoint

        med_class = get_mediator_class(self.array_type)
        self.mediator = med_class(array_connection_info)

    def disconnect(self):
        if self.mediator:
            mediator = self.mediator
            self.mediator = None
            mediator.disconnect()

    @contextmanager
    def get_mediator(self):
        yield self.mediator
