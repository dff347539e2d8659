import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from stdatacleaner import STDataCleaner

from .config_manager import ConfigManager, ValidatorConfig
from .errors import ConfigError
from .formatter import ReportFormatter
from .utils import auto_repair
from .validator import STValidator

logger = logging.getLogger("stvalidator")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID = 10


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="stvalidator",
                                     description="IEC 61131-3 Structured Text static validator")
    parser.add_argument("-c", "--config", type=str, default=None,
                        help="config.yaml 路径 (默认读取当前目录下的 config.yaml，如果存在)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="校验一个或多个 ST 文件 ('-' 表示 stdin)")
    p_validate.add_argument("files", nargs="+", help="ST 源码文件")
    p_validate.add_argument("--json", action="store_true", help="输出 JSON 报告")
    p_validate.add_argument("--repair", action="store_true",
                            help="校验前先从 Markdown / 大模型输出中提取代码")

    p_clean = sub.add_parser("clean", help="批量校验 JSON 数据集并按质量分桶")
    p_clean.add_argument("input_dir", help="包含原始 JSON 数据集的输入文件夹")
    p_clean.add_argument("output_dir", help="输出根目录")
    p_clean.add_argument("-e", "--ext", type=str, default=".json", help="要处理的文件扩展名 (默认: .json)")
    p_clean.add_argument("--strict", action="store_true", help="严格模式：只写出 golden 样本")

    return parser.parse_args(argv)


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        return f.read()


def run_validate(args: argparse.Namespace, validator: STValidator) -> int:
    formatter = ReportFormatter()
    exit_code = EXIT_OK
    json_reports = {}

    for path in args.files:
        try:
            code = _read_source(path)
        except OSError as e:
            logger.error(f"❌ Cannot read {path}: {e}")
            exit_code = EXIT_FAILURE
            continue

        if args.repair:
            code = auto_repair(code)

        report = validator.validate(code)
        if not report.is_valid and exit_code == EXIT_OK:
            exit_code = EXIT_INVALID

        if args.json:
            json_reports[path] = report.to_dict()
        else:
            print(formatter.render_text(report, source=path))

    if args.json:
        if len(args.files) == 1 and json_reports:
            payload = next(iter(json_reports.values()))
        else:
            payload = json_reports
        print(json.dumps(payload, indent=2, ensure_ascii=False))

    return exit_code


def run_clean(args: argparse.Namespace, config: ValidatorConfig) -> int:
    if not os.path.isdir(args.input_dir):
        logger.error(f"❌ Input directory '{args.input_dir}' does not exist")
        return EXIT_FAILURE

    cleaner = STDataCleaner(
        input_dir=args.input_dir,
        output_dir=args.output_dir,
        strict=args.strict,
        ext=args.ext,
        config=config,
    )
    cleaner.run()
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        manager = ConfigManager(args.config)
        config = manager.validator_config()
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
        logger.error(f"❌ {e}")
        return EXIT_FAILURE

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.command == "clean":
        return run_clean(args, config)
    return run_validate(args, STValidator(config))


if __name__ == "__main__":
    sys.exit(main())
