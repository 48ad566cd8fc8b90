# -*- coding: utf-8 -*-
# Copyright 2015 Cyan, Inc.
# Copyright 2017, 2018, 2019 Ciena Corporation
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Test the doubleroundrobin.kafkacodec module.
"""

import struct
from unittest import TestCase

from doubleroundrobin.common import (
    BufferUnderflowError, ProtocolError, _JoinGroupProtocolMetadata,
    _SyncGroupMemberAssignment,
)
from doubleroundrobin.kafkacodec import KafkaCodec


class TestKafkaCodec(TestCase):
    def test_encode_join_group_protocol_metadata(self):
        encoded = KafkaCodec.encode_join_group_protocol_metadata(
            version=0,
            subscriptions=['topic2', 'topic1'],
            user_data=b'',
        )
        self.assertEqual(encoded, b''.join([
            struct.pack('>hi', 0, 2),
            struct.pack('>h6s', 6, b'topic1'),
            struct.pack('>h6s', 6, b'topic2'),
            struct.pack('>i', 0),
        ]))

    def test_decode_join_group_protocol_metadata(self):
        data = b''.join([
            struct.pack('>hi', 0, 1),
            struct.pack('>h2s', 2, b't0'),
            struct.pack('>i3s', 3, b'abc'),
        ])
        self.assertEqual(
            KafkaCodec.decode_join_group_protocol_metadata(data),
            _JoinGroupProtocolMetadata(version=0, subscriptions=['t0'], user_data=b'abc'),
        )

    def test_decode_join_group_protocol_metadata_null_user_data(self):
        data = struct.pack('>hii', 0, 0, -1)
        self.assertEqual(
            KafkaCodec.decode_join_group_protocol_metadata(data),
            _JoinGroupProtocolMetadata(version=0, subscriptions=[], user_data=None),
        )

    def test_decode_join_group_protocol_metadata_newer_version(self):
        """
        Fields appended by later protocol versions are ignored.
        """
        data = struct.pack('>hiii', 1, 0, 0, 0)
        self.assertEqual(
            KafkaCodec.decode_join_group_protocol_metadata(data),
            _JoinGroupProtocolMetadata(version=1, subscriptions=[], user_data=b''),
        )

    def test_decode_join_group_protocol_metadata_trailing(self):
        data = struct.pack('>hiib', 0, 0, 0, 7)
        with self.assertRaises(ProtocolError) as context:
            KafkaCodec.decode_join_group_protocol_metadata(data)
        self.assertEqual(str(context.exception), '1 trailing bytes after member metadata')

    def test_decode_join_group_protocol_metadata_truncated(self):
        data = struct.pack('>hih', 0, 1, 5) + b'abc'
        with self.assertRaises(BufferUnderflowError):
            KafkaCodec.decode_join_group_protocol_metadata(data)

    def test_decode_join_group_protocol_metadata_bad_count(self):
        with self.assertRaises(ProtocolError):
            KafkaCodec.decode_join_group_protocol_metadata(struct.pack('>hi', 0, -5))

    def test_decode_join_group_protocol_metadata_null_topic(self):
        """
        A subscription encoded as a null string is rejected instead of
        surfacing as a `None` topic.
        """
        data = struct.pack('>hih', 0, 1, -1) + struct.pack('>i', 0)
        with self.assertRaises(ProtocolError) as context:
            KafkaCodec.decode_join_group_protocol_metadata(data)
        self.assertEqual(str(context.exception), 'null topic name at offset 6')

    def test_decode_sync_group_member_assignment_null_topic(self):
        data = struct.pack('>hihi', 0, 1, -1, 0) + struct.pack('>i', 0)
        with self.assertRaises(ProtocolError):
            KafkaCodec.decode_sync_group_member_assignment(data)

    def test_encode_sync_group_member_assignment(self):
        encoded = KafkaCodec.encode_sync_group_member_assignment(
            version=0,
            assignments={'t1': [3], 't0': [0, 2]},
            user_data=b'',
        )
        self.assertEqual(encoded, b''.join([
            struct.pack('>hi', 0, 2),
            struct.pack('>h2s', 2, b't0'),
            struct.pack('>iii', 2, 0, 2),
            struct.pack('>h2s', 2, b't1'),
            struct.pack('>ii', 1, 3),
            struct.pack('>i', 0),
        ]))

    def test_encode_sync_group_member_assignment_empty(self):
        encoded = KafkaCodec.encode_sync_group_member_assignment(
            version=0, assignments={}, user_data=b'')
        self.assertEqual(encoded, struct.pack('>hii', 0, 0, 0))

    def test_decode_sync_group_member_assignment(self):
        data = b''.join([
            struct.pack('>hi', 0, 1),
            struct.pack('>h2s', 2, b't0'),
            struct.pack('>iii', 2, 1, 3),
            struct.pack('>i', 0),
        ])
        self.assertEqual(
            KafkaCodec.decode_sync_group_member_assignment(data),
            _SyncGroupMemberAssignment(version=0, assignments={'t0': (1, 3)}, user_data=b''),
        )

    def test_decode_sync_group_member_assignment_truncated(self):
        data = struct.pack('>hih2si', 0, 1, 2, b't0', 2) + struct.pack('>i', 1)
        with self.assertRaises(BufferUnderflowError):
            KafkaCodec.decode_sync_group_member_assignment(data)
