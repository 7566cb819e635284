"""Workspace 准备逻辑。

包含：
- training: 内置训练文件的加载与解析。
- provisioner: 按顺序选择 / 创建 workspace 的策略。
"""
