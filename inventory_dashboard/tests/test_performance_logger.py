# -*- coding: utf-8 -*-
"""
Tests del sistema de profiling y de los archivos de log
"""
import logging
import os

import pytest

from inventory_dashboard import performance_logger
from inventory_dashboard.performance_logger import (
    ENABLE_PROFILING,
    configure_logging,
    get_function_stats,
    reset_stats,
)


@pytest.mark.skipif(not ENABLE_PROFILING, reason="profiling desactivado")
def test_service_commands_are_profiled(inventory_service, users):
    reset_stats()
    inventory_service.update_item('1', {'quantity': 2}, users['admin'])
    stats = get_function_stats()
    assert stats['Editar ítem']['calls'] == 1
    assert stats['Editar ítem']['max_time'] >= 0

    reset_stats()
    assert get_function_stats() == {}


def test_route_names_are_human_readable():
    assert performance_logger._get_route_name('GET', '/api/items/3', '/api/items/<item_id>') == 'Ver ítem'
    assert performance_logger._get_route_name('GET', '/health') == 'GET /health'


def test_configure_logging_creates_files(tmp_path):
    logs_dir = str(tmp_path / 'logs')
    app_logger = logging.getLogger('inventory_dashboard')
    before = list(app_logger.handlers)
    try:
        assert configure_logging(logs_dir) == logs_dir
        configure_logging(logs_dir)
        added = [h for h in app_logger.handlers if h not in before]
        assert len(added) == 1

        logging.getLogger('inventory_dashboard.services.user_service').info('prueba')
        added[0].flush()
        with open(os.path.join(logs_dir, 'app.log'), encoding='utf-8') as f:
            assert 'prueba' in f.read()
        for name in ('performance.log', 'slow_routes.log', 'slow_functions.log'):
            assert os.path.exists(os.path.join(logs_dir, name))
    finally:
        for name in ('inventory_dashboard', 'inventory_dashboard.performance',
                     'inventory_dashboard.performance.slow_routes',
                     'inventory_dashboard.performance.slow_functions'):
            logger = logging.getLogger(name)
            for h in list(logger.handlers):
                if isinstance(h, logging.FileHandler) and h.baseFilename.startswith(str(tmp_path)):
                    logger.removeHandler(h)
                    h.close()
