"""IndexAdmin 单元测试."""

import unittest
from unittest.mock import MagicMock

from elasticadmin.acknowledgment import AckResult, ShardResult
from elasticadmin.exceptions import (
    MalformedResponseError,
    RequestFailedError,
    UnsupportedOperationError,
)
from elasticadmin.index_admin import IndexAdmin
from elasticadmin.index_admin.exceptions import (
    IndexAlreadyExistsError,
    IndexNameError,
    IndexNotFoundError,
    InvalidSettingError,
)
from elasticadmin.transport import (
    HttpMethod,
    NetworkError,
    Transport,
    TransportTimeoutError,
)

INDEX = "elasticadmin-index-test"

INDEX_MISSING = {
    "error": {"type": "index_not_found_exception", "reason": "no such index"},
    "status": 404,
}
SHARDS_OK = {"_shards": {"total": 2, "successful": 1, "failed": 0}}


class TestIndexAdminInit(unittest.TestCase):
    """IndexAdmin 构造测试."""

    def setUp(self):
        """设置测试环境."""
        self.transport = MagicMock(spec=Transport)

    def test_requires_index_name(self):
        """测试索引名称为空时抛出 IndexNameError 且不发起请求."""
        for name in (None, ""):
            with self.assertRaises(IndexNameError):
                IndexAdmin(self.transport, name)
        self.transport.execute.assert_not_called()

    def test_index_name_error_is_value_error(self):
        """测试 IndexNameError 同时是 ValueError."""
        with self.assertRaises(ValueError):
            IndexAdmin(self.transport, "")

    def test_invalid_index_names(self):
        """测试不符合规范的索引名称."""
        for name in ("_hidden", "-dash", "a b", "a/b", "a*", "..", "x" * 256):
            with self.assertRaises(IndexNameError):
                IndexAdmin(self.transport, name)

    def test_requires_transport(self):
        """测试传输层为 None."""
        with self.assertRaises(ValueError):
            IndexAdmin(None, INDEX)

    def test_name_is_read_only(self):
        """测试索引名称不可修改."""
        admin = IndexAdmin(self.transport, INDEX)
        self.assertEqual(admin.name, INDEX)
        with self.assertRaises(AttributeError):
            admin.name = "other"


class TestIndexAdmin(unittest.TestCase):
    """IndexAdmin 操作测试."""

    def setUp(self):
        """设置测试环境."""
        self.transport = MagicMock(spec=Transport)
        self.admin = IndexAdmin(self.transport, INDEX)

    def assert_request(self, method, path, body=None, params=None):
        self.transport.execute.assert_called_once_with(method, path, body, params)

    # ---------- exists ----------

    def test_exists(self):
        """测试索引存在."""
        self.transport.execute.return_value = (200, None)

        self.assertTrue(self.admin.exists())
        self.assert_request(HttpMethod.HEAD, f"/{INDEX}")

    def test_not_exists(self):
        """测试 404 映射为 False."""
        self.transport.execute.return_value = (404, None)

        self.assertFalse(self.admin.exists())

    def test_exists_other_status_raises(self):
        """测试其他状态码抛出 RequestFailedError."""
        self.transport.execute.return_value = (503, None)

        with self.assertRaises(RequestFailedError) as ctx:
            self.admin.exists()
        self.assertEqual(ctx.exception.status_code, 503)

    def test_exists_timeout_propagates(self):
        """测试传输层超时原样抛出."""
        self.transport.execute.side_effect = TransportTimeoutError("timed out")

        with self.assertRaises(TransportTimeoutError):
            self.admin.exists()

    def test_network_error_propagates(self):
        """测试传输层连接失败原样抛出."""
        self.transport.execute.side_effect = NetworkError("connection refused")

        with self.assertRaises(NetworkError) as ctx:
            self.admin.exists()
        self.assertIsNone(ctx.exception.status_code)

        with self.assertRaises(NetworkError):
            self.admin.settings()

    # ---------- create / delete ----------

    def test_create_with_settings_and_mappings(self):
        """测试带设置与映射创建索引."""
        self.transport.execute.return_value = (200, {"acknowledged": True})
        settings = {"number_of_shards": 3, "number_of_replicas": 0}
        mappings = {"doco": {"properties": {"title": {"type": "string"}}}}

        result = self.admin.create(settings=settings, mappings=mappings)

        self.assertEqual(result, AckResult(True, {"acknowledged": True}))
        self.assert_request(
            HttpMethod.PUT, f"/{INDEX}", {"settings": settings, "mappings": mappings}
        )

    def test_create_without_body(self):
        """测试不带请求体创建索引."""
        self.transport.execute.return_value = (200, {"acknowledged": True})

        self.assertTrue(self.admin.create().acknowledged)
        self.assert_request(HttpMethod.PUT, f"/{INDEX}", None)

    def test_create_already_exists(self):
        """测试创建已存在的索引."""
        self.transport.execute.return_value = (
            400,
            {"error": "IndexAlreadyExistsException[[elasticadmin-index-test] already exists]"},
        )

        with self.assertRaises(IndexAlreadyExistsError):
            self.admin.create()

    def test_create_server_error(self):
        """测试创建时服务端返回其他错误."""
        self.transport.execute.return_value = (
            400,
            {"error": {"type": "mapper_parsing_exception", "reason": "bad mapping"}},
        )

        with self.assertRaises(RequestFailedError) as ctx:
            self.admin.create(mappings={"doco": {"properties": {"x": {"type": "?"}}}})
        self.assertIn("bad mapping", str(ctx.exception))
        self.assertEqual(ctx.exception.status_code, 400)

    def test_delete(self):
        """测试删除索引."""
        self.transport.execute.return_value = (200, {"acknowledged": True})

        self.assertTrue(self.admin.delete().acknowledged)
        self.assert_request(HttpMethod.DELETE, f"/{INDEX}")

    def test_delete_not_found(self):
        """测试删除不存在的索引."""
        self.transport.execute.return_value = (404, {"error": "IndexMissingException[[x] missing]"})

        with self.assertRaises(IndexNotFoundError):
            self.admin.delete()

    def test_open_and_close(self):
        """测试打开与关闭索引."""
        self.transport.execute.return_value = (200, {"acknowledged": True})

        self.assertTrue(self.admin.open().acknowledged)
        self.transport.execute.assert_called_with(
            HttpMethod.POST, f"/{INDEX}/_open", None, None
        )
        self.assertTrue(self.admin.close().acknowledged)
        self.transport.execute.assert_called_with(
            HttpMethod.POST, f"/{INDEX}/_close", None, None
        )

    def test_open_wrong_state_raises_request_failed(self):
        """测试状态不正确时抛出 RequestFailedError."""
        self.transport.execute.return_value = (
            400,
            {"error": {"type": "index_closed_exception", "reason": "closed"}},
        )

        with self.assertRaises(RequestFailedError):
            self.admin.open()

    def test_missing_index_raises_not_found(self):
        """测试读操作遇到索引不存在时抛出 IndexNotFoundError."""
        self.transport.execute.return_value = (404, INDEX_MISSING)

        with self.assertRaises(IndexNotFoundError):
            self.admin.settings()

    # ---------- settings ----------

    def test_settings_flat_shape(self):
        """测试扁平格式的设置被规范化."""
        self.transport.execute.return_value = (
            200,
            {INDEX: {"settings": {"index.number_of_shards": "3", "index.number_of_replicas": "0"}}},
        )

        settings = self.admin.settings()

        self.assertEqual(
            settings[INDEX]["settings"],
            {"index": {"number_of_shards": "3", "number_of_replicas": "0"}},
        )
        self.assert_request(HttpMethod.GET, f"/{INDEX}/_settings")

    def test_setting_lookup(self):
        """测试按点号路径读取单个设置."""
        self.transport.execute.return_value = (
            200,
            {INDEX: {"settings": {"index": {"number_of_replicas": "1"}}}},
        )

        self.assertEqual(self.admin.setting("index.number_of_replicas"), "1")
        self.assertIsNone(self.admin.setting("index.codec"))

    def test_setting_missing_index_entry(self):
        """测试设置响应中缺少本索引."""
        self.transport.execute.return_value = (200, {"other": {"settings": {}}})

        with self.assertRaises(MalformedResponseError):
            self.admin.setting("index.number_of_replicas")

    def test_update_settings(self):
        """测试更新索引设置."""
        self.transport.execute.return_value = (200, {"acknowledged": True})

        result = self.admin.update_settings({"index.number_of_replicas": 1})

        self.assertTrue(result.acknowledged)
        self.assert_request(
            HttpMethod.PUT, f"/{INDEX}/_settings", {"index.number_of_replicas": 1}
        )

    def test_update_settings_rejected(self):
        """测试非动态设置被拒绝."""
        self.transport.execute.return_value = (
            400,
            {
                "error": {
                    "type": "illegal_argument_exception",
                    "reason": "Can't update non dynamic settings [[index.number_of_shards]]",
                }
            },
        )

        with self.assertRaises(InvalidSettingError) as ctx:
            self.admin.update_settings({"index": {"number_of_shards": 5}})
        self.assertIsInstance(ctx.exception, RequestFailedError)
        self.assertIn("non dynamic", str(ctx.exception))

    def test_update_settings_empty(self):
        """测试空设置."""
        with self.assertRaises(ValueError):
            self.admin.update_settings({})
        self.transport.execute.assert_not_called()

    # ---------- mapping ----------

    def test_mapping(self):
        """测试获取映射."""
        doco = {"properties": {"title": {"type": "string"}}}
        self.transport.execute.return_value = (200, {INDEX: {"mappings": {"doco": doco}}})

        self.assertEqual(self.admin.mapping(), {INDEX: {"doco": doco}})
        self.assert_request(HttpMethod.GET, f"/{INDEX}/_mapping")

    def test_mapping_by_type(self):
        """测试按类型获取映射."""
        doco = {"properties": {"title": {"type": "string"}}}
        self.transport.execute.return_value = (200, {"doco": doco})

        self.assertEqual(self.admin.mapping("doco"), {INDEX: {"doco": doco}})
        self.assert_request(HttpMethod.GET, f"/{INDEX}/_mapping/doco")

    def test_mapping_missing_type(self):
        """测试类型不存在时返回空映射."""
        self.transport.execute.return_value = (404, {"error": "TypeMissingException[[x] type[[doco]] missing]"})

        self.assertEqual(self.admin.mapping("doco"), {INDEX: {}})

    def test_update_mapping(self):
        """测试更新映射."""
        self.transport.execute.return_value = (200, {"acknowledged": True})
        body = {"doco": {"properties": {"author": {"type": "string"}}}}

        self.assertTrue(self.admin.update_mapping("doco", body).acknowledged)
        self.assert_request(HttpMethod.PUT, f"/{INDEX}/_mapping/doco", body)

    def test_update_mapping_requires_type(self):
        """测试类型名称为空."""
        with self.assertRaises(ValueError):
            self.admin.update_mapping("", {"properties": {}})

    def test_delete_mapping(self):
        """测试删除映射."""
        self.transport.execute.return_value = (200, {"acknowledged": True})

        self.assertTrue(self.admin.delete_mapping("doco").acknowledged)
        self.assert_request(HttpMethod.DELETE, f"/{INDEX}/_mapping/doco")

    def test_delete_mapping_legacy_ok(self):
        """测试 0.90 只返回 ok 的删除映射响应."""
        self.transport.execute.return_value = (200, {"ok": True})

        self.assertTrue(self.admin.delete_mapping("doco").acknowledged)

    def test_delete_mapping_is_idempotent(self):
        """测试删除不存在的类型时返回已确认结果."""
        self.transport.execute.return_value = (
            404,
            {"error": "TypeMissingException[[elasticadmin-index-test] type[doco] missing]"},
        )

        result = self.admin.delete_mapping("doco")

        self.assertTrue(result.acknowledged)

    def test_delete_mapping_missing_index(self):
        """测试删除映射时索引不存在."""
        self.transport.execute.return_value = (404, INDEX_MISSING)

        with self.assertRaises(IndexNotFoundError):
            self.admin.delete_mapping("doco")

    # ---------- aliases ----------

    def test_get_aliases(self):
        """测试获取别名."""
        self.transport.execute.return_value = (200, {INDEX: {"aliases": {"foo": {}}}})

        self.assertEqual(self.admin.get_aliases(), {INDEX: {"aliases": {"foo": {}}}})
        self.assert_request(HttpMethod.GET, f"/{INDEX}/_aliases")

    # ---------- analyze ----------

    def test_analyze(self):
        """测试分析文本."""
        words = ["just", "a", "few", "words", "to", "analyze"]
        self.transport.execute.return_value = (
            200,
            {
                "tokens": [
                    {"token": word, "start_offset": 0, "end_offset": 0, "type": "word", "position": i}
                    for i, word in enumerate(words, start=1)
                ]
            },
        )

        tokens = self.admin.analyze("Just a few words to analyze.", "simple", index=False)

        self.assertEqual(tokens, words)
        self.assert_request(
            HttpMethod.GET,
            "/_analyze",
            {"text": "Just a few words to analyze.", "analyzer": "simple"},
        )

    def test_analyze_tokens_bound_to_index(self):
        """测试使用索引上的分析器并返回完整词元."""
        self.transport.execute.return_value = (
            200,
            {"tokens": [{"token": "just", "start_offset": 0, "end_offset": 4, "type": "<ALPHANUM>", "position": 1}]},
        )

        tokens = self.admin.analyze_tokens("Just", tokenizer="standard", filter=["lowercase"])

        self.assertEqual(tokens[0].token, "just")
        self.assertEqual(tokens[0].end_offset, 4)
        self.assert_request(
            HttpMethod.GET,
            f"/{INDEX}/_analyze",
            {"text": "Just", "tokenizer": "standard", "filter": ["lowercase"]},
        )

    def test_analyze_malformed(self):
        """测试分析响应缺少 tokens."""
        self.transport.execute.return_value = (200, {"detail": {}})

        with self.assertRaises(MalformedResponseError):
            self.admin.analyze("text")

    def test_analyze_malformed_token_entries(self):
        """测试词元缺少 token 字段或不是对象."""
        for tokens in ([{"start_offset": 0}], ["just"], [None]):
            self.transport.execute.return_value = (200, {"tokens": tokens})

            with self.assertRaises(MalformedResponseError):
                self.admin.analyze("text")

    # ---------- 数据面操作 ----------

    def test_refresh(self):
        """测试刷新索引."""
        self.transport.execute.return_value = (200, SHARDS_OK)

        result = self.admin.refresh()

        self.assertIsInstance(result, ShardResult)
        self.assertEqual(result.failed, 0)
        self.assert_request(HttpMethod.POST, f"/{INDEX}/_refresh")

    def test_flush_with_params(self):
        """测试 flush 参数."""
        self.transport.execute.return_value = (200, SHARDS_OK)

        self.admin.flush(force=True)

        self.assert_request(HttpMethod.POST, f"/{INDEX}/_flush", None, {"force": "true"})

    def test_optimize(self):
        """测试合并索引段."""
        self.transport.execute.return_value = (200, SHARDS_OK)

        result = self.admin.optimize(max_num_segments=1)

        self.assertTrue(result.ok)
        self.assert_request(
            HttpMethod.POST, f"/{INDEX}/_optimize", None, {"max_num_segments": "1"}
        )

    def test_clear_cache(self):
        """测试清理缓存."""
        self.transport.execute.return_value = (200, SHARDS_OK)

        self.admin.clear_cache()

        self.assert_request(HttpMethod.POST, f"/{INDEX}/_cache/clear")

    def test_partial_shard_failure_is_returned(self):
        """测试部分分片失败以数据返回，不抛出异常."""
        self.transport.execute.return_value = (
            200,
            {"_shards": {"total": 4, "successful": 2, "failed": 2}},
        )

        result = self.admin.flush()

        self.assertFalse(result.ok)
        self.assertEqual(result.failed, 2)

    def test_snapshot(self):
        """测试 gateway snapshot."""
        self.transport.execute.return_value = (200, SHARDS_OK)

        self.assertEqual(self.admin.snapshot().failed, 0)
        self.assert_request(HttpMethod.POST, f"/{INDEX}/_gateway/snapshot")

    def test_snapshot_unsupported_version(self):
        """测试已知不支持的服务端版本不发起请求."""
        admin = IndexAdmin(self.transport, INDEX, server_version="1.7.5")

        with self.assertRaises(UnsupportedOperationError):
            admin.snapshot()
        self.transport.execute.assert_not_called()

    def test_snapshot_rejected_by_server(self):
        """测试服务端拒绝 snapshot 接口."""
        self.transport.execute.return_value = (
            400,
            {"error": "InvalidTypeNameException[mapping type name [_gateway] can't start with '_']"},
        )

        with self.assertRaises(UnsupportedOperationError):
            self.admin.snapshot()

    def test_snapshot_missing_index(self):
        """测试 snapshot 时索引不存在."""
        self.transport.execute.return_value = (404, INDEX_MISSING)

        with self.assertRaises(IndexNotFoundError):
            self.admin.snapshot()

    # ---------- 诊断信息 ----------

    def test_stats_status_segments(self):
        """测试诊断接口返回原始响应."""
        response = {"_shards": {}, "indices": {INDEX: {"primaries": {}}}}
        self.transport.execute.return_value = (200, response)

        for method_name, path in (
            ("stats", "_stats"),
            ("status", "_status"),
            ("segments", "_segments"),
        ):
            self.transport.execute.reset_mock()
            self.assertEqual(getattr(self.admin, method_name)(), response)
            self.assert_request(HttpMethod.GET, f"/{INDEX}/{path}")

    def test_index_stats_legacy_shape(self):
        """测试旧格式 _all.indices 的统计."""
        self.transport.execute.return_value = (
            200,
            {"_all": {"indices": {INDEX: {"primaries": {"docs": {"count": 0}}}}}},
        )

        self.assertEqual(
            self.admin.index_stats(), {"primaries": {"docs": {"count": 0}}}
        )

    def test_index_stats_missing_entry(self):
        """测试统计响应中缺少本索引."""
        self.transport.execute.return_value = (200, {"indices": {}})

        with self.assertRaises(MalformedResponseError):
            self.admin.index_stats()


if __name__ == "__main__":
    unittest.main()
