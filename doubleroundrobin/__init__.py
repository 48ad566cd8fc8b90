# -*- coding: utf-8 -*-
# Copyright 2016 Cyan, Inc.
# Copyright 2018, 2019, 2020, 2021 Ciena Corporation

from ._group import DoubleRoundRobinAssignor
from .common import (
    DISTINCT, DUPLICATE, SAME_GROUP, GroupMember, InputInconsistency,
    TopicPartition,
)
from .group_assignment import double_round_robin_assignment
from .grouping import group_members
from .replica import ClientIdReplicaComparator, all_distinct, client_id_of

__title__ = 'doubleroundrobin'
__version__ = "0.1.0"
__license__ = 'Apache License 2.0'

__all__ = [
    'DoubleRoundRobinAssignor', 'double_round_robin_assignment',
    'group_members', 'GroupMember', 'TopicPartition', 'InputInconsistency',
    'ClientIdReplicaComparator', 'all_distinct', 'client_id_of',
    'DISTINCT', 'SAME_GROUP', 'DUPLICATE',
]
