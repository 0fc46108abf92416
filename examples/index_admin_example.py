"""索引管理使用示例.

本文件展示了如何使用 IndexAdmin 与 ClusterAdmin 管理单个索引，
以及在不同服务端版本下读取规范化后的设置与映射。
"""

import logging

from elasticadmin import (
    ClusterAdmin,
    ElasticsearchTransport,
    IndexAdmin,
    IndexAlreadyExistsError,
    TransportConfig,
    UnsupportedOperationError,
)

logging.basicConfig(level=logging.INFO)

# 创建传输层
transport = ElasticsearchTransport.from_config(
    TransportConfig(
        hosts=["http://localhost:9200"],
        request_timeout=10,
        max_retries=2,
    )
)

cluster = ClusterAdmin(transport)
admin = cluster.index("elasticadmin-example", server_version=cluster.server_version())


# ==================== 示例1：创建索引 ====================
def example_create():
    """创建带设置和映射的索引."""
    if admin.exists():
        admin.delete()

    try:
        result = admin.create(
            settings={"number_of_shards": 1, "number_of_replicas": 0},
            mappings={"doco": {"properties": {"title": {"type": "string"}}}},
        )
    except IndexAlreadyExistsError:
        print("索引已存在")
        return

    print(f"创建结果: acknowledged={result.acknowledged}")
    cluster.wait_for_index(admin.name)


# ==================== 示例2：设置与映射 ====================
def example_settings_and_mapping():
    """读取设置，更新映射."""
    # 无论服务端返回扁平还是嵌套格式，都可以用同一路径读取
    print(f"分片数: {admin.setting('index.number_of_shards')}")
    print(f"副本数: {admin.setting('index.number_of_replicas')}")

    admin.update_settings({"index.number_of_replicas": 1})

    admin.update_mapping("doco", {"doco": {"properties": {"author": {"type": "string"}}}})
    properties = admin.mapping()[admin.name]["doco"]["properties"]
    print(f"字段: {sorted(properties)}")


# ==================== 示例3：别名 ====================
def example_aliases():
    """添加并读取别名."""
    cluster.update_aliases(add={"index": admin.name, "alias": "example"})
    print(f"别名: {admin.get_aliases()}")


# ==================== 示例4：数据面操作 ====================
def example_data_plane():
    """refresh、optimize 与 snapshot."""
    for operation in (admin.refresh, admin.flush, admin.optimize):
        result = operation()
        print(f"{operation.__name__}: {result.successful}/{result.total} 成功")

    try:
        admin.snapshot()
    except UnsupportedOperationError as e:
        print(f"跳过 snapshot: {e}")

    tokens = admin.analyze("Just a few words to analyze.", "simple", index=False)
    print(f"分析结果: {tokens}")


# ==================== 主函数 ====================
def main():
    """运行所有示例."""
    print("=" * 50)
    print("索引管理示例")
    print("=" * 50)

    print("\n1. 创建索引")
    print("-" * 50)
    example_create()

    print("\n2. 设置与映射")
    print("-" * 50)
    example_settings_and_mapping()

    print("\n3. 别名")
    print("-" * 50)
    example_aliases()

    print("\n4. 数据面操作")
    print("-" * 50)
    example_data_plane()

    admin.delete()
    transport.close()


if __name__ == "__main__":
    main()
