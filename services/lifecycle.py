"""
Transições entre Coleções - BrainQuiz
=====================================

Mover um registro entre dois estados é inserir no destino e depois
remover da origem. Se a remoção falhar, a inserção é desfeita e o erro
sobe como StorageError (repetível), sem alterar o estado. Cada falha é
registrada com uma mensagem própria para reconciliação manual.
"""

import logging

from utils.errors import StorageError

logger = logging.getLogger(__name__)


def transfer(store, record, source, target, action):
    """
    Move record de source para target (mesmo id nas duas coleções)

    Args:
        store: Store com o lock de transições
        record: entidade já carimbada para o estado de destino
        source, target: repositórios de origem e destino
        action (str): nome da transição para os logs

    Returns:
        O registro gravado em target
    """
    with store.lock:
        try:
            target.insert(record)
        except StorageError:
            logger.error("%s: falha na transferência ao inserir %s em %s; nada foi alterado",
                         action, record.id, target.name)
            raise

        try:
            removed = source.remove(record.id)
        except StorageError:
            logger.error("%s: falha na transferência ao remover %s de %s; desfazendo inserção em %s",
                         action, record.id, source.name, target.name)
            _compensate(target, record, action)
            raise

        if removed is None:
            # Outra requisição levou o registro entre a leitura e a remoção
            logger.warning("%s: %s já não está em %s; desfazendo inserção em %s",
                           action, record.id, source.name, target.name)
            _compensate(target, record, action)
            raise StorageError('O registro foi alterado por outra operação. Tente novamente.')

    logger.info("%s: %s movido %s -> %s", action, record.id, source.name, target.name)
    return record


def _compensate(target, record, action):
    try:
        target.remove(record.id)
    except StorageError:
        logger.critical("%s: falha na compensação; %s está em %s e também na coleção de origem",
                        action, record.id, target.name)
